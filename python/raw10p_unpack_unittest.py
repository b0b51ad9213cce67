#!/usr/bin/env python3

"""raw10p_unpack_unittest.py: raw10p unpack unittest.

# runme
# $ ./raw10p_unpack_unittest.py
"""

import contextlib
import io
import sys

import raw10p_common
import raw10p_testing
import raw10p_unpack


unpackLineTestCases = [
    {
        "name": "single-item",
        "sample_count": 4,
        "input": b"\x0a\x14\x1e\x28\x55",
        "output": b"\x0a\x14\x1e\x28",
    },
    {
        "name": "two-items",
        "sample_count": 8,
        "input": b"\x01\x02\x03\x04\xff\x05\x06\x07\x08\xaa",
        "output": b"\x01\x02\x03\x04\x05\x06\x07\x08",
    },
    {
        "name": "three-items",
        "sample_count": 12,
        "input": b"\x01\x02\x03\x04\x00\x05\x06\x07\x08\x11\x09\x0a\x0b\x0c\x22",
        "output": b"\x01\x02\x03\x04\x05\x06\x07\x08\x09\x0a\x0b\x0c",
    },
    {
        "name": "partial-last-item",
        "sample_count": 6,
        "input": b"\x01\x02\x03\x04\xff\x05\x06",
        "output": b"\x01\x02\x03\x04\x05\x06",
    },
    {
        "name": "padding",
        "sample_count": 4,
        "input": b"\x01\x02\x03\x04\xff\xee\xee\xee",
        "output": b"\x01\x02\x03\x04",
    },
    {
        "name": "no-lsb-byte",
        "sample_count": 4,
        "input": b"\x01\x02\x03\x04",
        "output": b"\x01\x02\x03\x04",
    },
    {
        "name": "partial-read",
        "sample_count": 5,
        "input": b"\x01\x02\x03\x04\xff\x05\x06\x07\x08\xaa",
        "output": b"\x01\x02\x03\x04\x05",
    },
]

getLineSpanTestCases = [
    {"name": "zero", "sample_count": 0, "span": 0},
    {"name": "one", "sample_count": 1, "span": 1},
    {"name": "four", "sample_count": 4, "span": 4},
    {"name": "five", "sample_count": 5, "span": 6},
    {"name": "six", "sample_count": 6, "span": 7},
    {"name": "eight", "sample_count": 8, "span": 9},
    {"name": "640", "sample_count": 640, "span": 799},
]


class MainTest(raw10p_testing.TestCase):
    def testUnpackLine(self):
        """unpack_line test."""
        function_name = "testUnpackLine"
        for test_case in self.getTestCases(function_name, unpackLineTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            buffer = bytearray(test_case["input"])
            sample_count = test_case["sample_count"]
            raw10p_unpack.unpack_line(buffer, sample_count)
            # the buffer is updated in place, and keeps its size
            self.assertEqual(
                len(test_case["input"]),
                len(buffer),
                f"error on {test_case['name']}: buffer size changed",
            )
            self.compareBuffer(
                bytes(buffer[:sample_count]), test_case["output"], test_case["name"]
            )

    def testGetLineSpan(self):
        """get_line_span test."""
        function_name = "testGetLineSpan"
        for test_case in self.getTestCases(function_name, getLineSpanTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            self.assertEqual(
                test_case["span"],
                raw10p_unpack.get_line_span(test_case["sample_count"]),
                f"error on {test_case['name']}",
            )

    def testLowBitsAreDropped(self):
        """the LSB byte never changes the unpacked samples."""
        expected_output = b"\x12\x34\x56\x78\x9a\xbc\xde\xf0"
        for low in range(256):
            buffer = bytearray(b"\x12\x34\x56\x78" + bytes([low]))
            buffer += bytearray(b"\x9a\xbc\xde\xf0" + bytes([255 - low]))
            raw10p_unpack.unpack_line(buffer, 8)
            self.assertEqual(
                expected_output, bytes(buffer[:8]), f"error on low byte {low}"
            )

    def testLineTooShort(self):
        """unpack_line must not resize a short buffer."""
        buffer = bytearray(b"\x01\x02\x03\x04\xff\x05\x06\x07")
        with self.assertRaises(raw10p_common.LineTooShort):
            raw10p_unpack.unpack_line(buffer, 8)
        self.assertEqual(b"\x01\x02\x03\x04\xff\x05\x06\x07", bytes(buffer))

    def testDebugLog(self):
        # the trace goes to logfd only (stdout may be the output file)
        buffer = bytearray(b"\x12\x34\x56\x78\x00\x9a\xbc\xde\xf0\x00")
        logfd = io.StringIO()
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            raw10p_unpack.unpack_line(buffer, 8, logfd, 3)
        self.assertEqual(b"\x12\x34\x56\x78\x9a\xbc\xde\xf0", bytes(buffer[:8]))
        self.assertEqual("", stdout.getvalue())
        self.assertEqual(
            ["debug: unpack src=5 dst=4 size=4"], logfd.getvalue().splitlines()
        )


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
