#!/usr/bin/env python3

"""raw10p_normalize_unittest.py: raw10p normalize unittest.

# runme
# $ ./raw10p_normalize_unittest.py
"""

import io
import sys

import raw10p_common
import raw10p_normalize
import raw10p_testing


# 4x4 frame, 5-byte lines, same line repeated
REPEATED_INPUT = b"\x0a\x14\x1e\x28\x7f" * 4
# 4x4 frame, 6-byte lines (1 byte padding), rows 0x01.., 0x11.., 0x21.., 0x31..
ROWS_INPUT = (
    b"\x01\x02\x03\x04\xaa\xee"
    b"\x11\x12\x13\x14\xbb\xee"
    b"\x21\x22\x23\x24\xcc\xee"
    b"\x31\x32\x33\x34\xdd\xee"
)

convertTestCases = [
    {
        "name": "repeated-bggr",
        "width": 4,
        "height": 4,
        "line_len": 5,
        "phase": raw10p_common.BayerPhase.blue_green,
        "input": REPEATED_INPUT,
        "output_size": (4, 2),
        "output": b"\x0a\x14\x1e\x28" * 2,
    },
    {
        "name": "repeated-rggb",
        "width": 4,
        "height": 4,
        "line_len": 5,
        "phase": raw10p_common.BayerPhase.red_green,
        "input": REPEATED_INPUT,
        "output_size": (2, 4),
        "output": b"\x14\x1e" * 4,
    },
    {
        "name": "repeated-grbg",
        "width": 4,
        "height": 4,
        "line_len": 5,
        "phase": raw10p_common.BayerPhase.green_red,
        "input": REPEATED_INPUT,
        "output_size": (4, 4),
        "output": b"\x0a\x14\x1e\x28" * 4,
    },
    {
        "name": "repeated-gbrg",
        "width": 4,
        "height": 4,
        "line_len": 5,
        "phase": raw10p_common.BayerPhase.green_blue,
        "input": REPEATED_INPUT,
        "output_size": (2, 2),
        "output": b"\x14\x1e" * 2,
    },
    {
        "name": "rows-grbg",
        "width": 4,
        "height": 4,
        "line_len": 6,
        "phase": raw10p_common.BayerPhase.green_red,
        "input": ROWS_INPUT,
        "output_size": (4, 4),
        "output": b"\x01\x02\x03\x04\x11\x12\x13\x14\x21\x22\x23\x24\x31\x32\x33\x34",
    },
    {
        "name": "rows-rggb",
        "width": 4,
        "height": 4,
        "line_len": 6,
        "phase": raw10p_common.BayerPhase.red_green,
        "input": ROWS_INPUT,
        "output_size": (2, 4),
        "output": b"\x02\x03\x12\x13\x22\x23\x32\x33",
    },
    {
        "name": "rows-gbrg",
        "width": 4,
        "height": 4,
        "line_len": 6,
        "phase": raw10p_common.BayerPhase.green_blue,
        "input": ROWS_INPUT,
        "output_size": (2, 2),
        "output": b"\x12\x13\x22\x23",
    },
    {
        "name": "rows-bggr",
        "width": 4,
        "height": 4,
        "line_len": 6,
        "phase": raw10p_common.BayerPhase.blue_green,
        "input": ROWS_INPUT,
        "output_size": (4, 2),
        "output": b"\x11\x12\x13\x14\x21\x22\x23\x24",
    },
    {
        "name": "wide-rggb",
        "width": 8,
        "height": 2,
        "line_len": 10,
        "phase": raw10p_common.BayerPhase.red_green,
        "input": (
            b"\x01\x02\x03\x04\x00\x05\x06\x07\x08\x00"
            b"\x11\x12\x13\x14\xff\x15\x16\x17\x18\xff"
        ),
        "output_size": (6, 2),
        "output": b"\x02\x03\x04\x05\x06\x07\x12\x13\x14\x15\x16\x17",
    },
    {
        "name": "minimum-grbg",
        "width": 2,
        "height": 2,
        "line_len": 2,
        "phase": raw10p_common.BayerPhase.green_red,
        "input": b"\x01\x02\x03\x04",
        "output_size": (2, 2),
        "output": b"\x01\x02\x03\x04",
    },
]

zeroSizedOutputTestCases = [
    {
        "name": "2x2-rggb",
        "width": 2,
        "height": 2,
        "phase": raw10p_common.BayerPhase.red_green,
    },
    {
        "name": "2x2-gbrg",
        "width": 2,
        "height": 2,
        "phase": raw10p_common.BayerPhase.green_blue,
    },
    {
        "name": "2x2-bggr",
        "width": 2,
        "height": 2,
        "phase": raw10p_common.BayerPhase.blue_green,
    },
    {
        "name": "4x2-bggr",
        "width": 4,
        "height": 2,
        "phase": raw10p_common.BayerPhase.blue_green,
    },
    {
        "name": "2x4-rggb",
        "width": 2,
        "height": 4,
        "phase": raw10p_common.BayerPhase.red_green,
    },
]


class MainTest(raw10p_testing.TestCase):
    def testConvert(self):
        """convert test."""
        function_name = "testConvert"
        for test_case in self.getTestCases(function_name, convertTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            geometry = raw10p_common.FrameGeometry(
                test_case["width"], test_case["height"], test_case["line_len"]
            )
            fin = io.BytesIO(test_case["input"])
            fout = io.BytesIO()
            output_size = raw10p_normalize.convert(
                fin, fout, geometry, test_case["phase"]
            )
            self.assertEqual(test_case["output_size"], output_size)
            o_width, o_height = output_size
            output = fout.getvalue()
            self.assertEqual(o_width * o_height, len(output))
            self.compareBuffer(output, test_case["output"], test_case["name"])

    def testBottomLineIsNotRead(self):
        # BGGR: the 4th line is dropped, so a 3-line input is enough
        geometry = raw10p_common.FrameGeometry(4, 4, 6)
        fin = io.BytesIO(ROWS_INPUT[: 3 * 6])
        fout = io.BytesIO()
        raw10p_normalize.convert(
            fin, fout, geometry, raw10p_common.BayerPhase.blue_green
        )
        self.assertEqual(b"\x11\x12\x13\x14\x21\x22\x23\x24", fout.getvalue())
        self.assertEqual(3 * 6, fin.tell())

    def testZeroSizedOutput(self):
        """convert with a frame that trims to nothing."""
        function_name = "testZeroSizedOutput"
        for test_case in self.getTestCases(function_name, zeroSizedOutputTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            width = test_case["width"]
            height = test_case["height"]
            geometry = raw10p_common.FrameGeometry(width, height, width)
            fin = io.BytesIO(b"\x01" * (width * height))
            fout = io.BytesIO()
            with self.assertRaises(raw10p_common.ZeroSizedOutput):
                raw10p_normalize.convert(fin, fout, geometry, test_case["phase"])
            # nothing is read or written
            self.assertEqual(0, fin.tell())
            self.assertEqual(b"", fout.getvalue())

    def testShortRead(self):
        geometry = raw10p_common.FrameGeometry(4, 4, 6)
        for phase in raw10p_common.BayerPhase:
            fin = io.BytesIO(ROWS_INPUT[:-1])
            fout = io.BytesIO()
            if phase.get_trim().bottom:
                # the truncated line is never read
                raw10p_normalize.convert(fin, fout, geometry, phase)
                continue
            with self.assertRaises(raw10p_common.ShortRead, msg=phase.name):
                raw10p_normalize.convert(fin, fout, geometry, phase)
            # the lines before the error are kept
            o_width = 4 - 2 * phase.get_trim().left
            self.assertEqual(3 * o_width, len(fout.getvalue()))

    def testEmptyInput(self):
        geometry = raw10p_common.FrameGeometry(4, 4, 5)
        with self.assertRaises(raw10p_common.ShortRead):
            raw10p_normalize.convert(
                io.BytesIO(b""),
                io.BytesIO(),
                geometry,
                raw10p_common.BayerPhase.blue_green,
            )

    def testWriteFailure(self):
        geometry = raw10p_common.FrameGeometry(4, 4, 6)
        fout = raw10p_testing.ShortWriter(max_size=3)
        with self.assertRaises(raw10p_common.WriteFailure):
            raw10p_normalize.convert(
                io.BytesIO(ROWS_INPUT),
                fout,
                geometry,
                raw10p_common.BayerPhase.green_red,
            )
        self.assertEqual(b"\x01\x02\x03", bytes(fout.data))

    def testWriteOSError(self):
        class BrokenWriter(io.RawIOBase):
            def writable(self):
                return True

            def write(self, b):
                raise OSError(28, "No space left on device")

        fout = BrokenWriter()
        with self.assertRaises(raw10p_common.WriteFailure):
            raw10p_normalize.write_data(fout, b"\x00")

    def testLineTooShort(self):
        # 8 pixels need 9 bytes of packed line
        geometry = raw10p_common.FrameGeometry(8, 2, 8)
        with self.assertRaises(raw10p_common.LineTooShort):
            raw10p_normalize.convert(
                io.BytesIO(b"\x00" * 16),
                io.BytesIO(),
                geometry,
                raw10p_common.BayerPhase.green_red,
            )


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
