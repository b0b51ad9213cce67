#!/usr/bin/env python3

"""raw10p_visualize_unittest.py: raw10p visualize unittest.

# runme
# $ ./raw10p_visualize_unittest.py
"""

import io
import numpy as np
import sys

import raw10p_common
import raw10p_normalize
import raw10p_testing
import raw10p_visualize


# 2x2 frame, 2-byte lines (no full packed item)
INPUT_2X2 = b"\x01\x02\x03\x04"

visualizeTestCases = [
    {
        "name": "grbg-2x2",
        "width": 2,
        "height": 2,
        "line_len": 2,
        "phase": raw10p_common.BayerPhase.green_red,
        "input": INPUT_2X2,
        # G R / B G
        "output": b"P6\n2 2\n255\n"
        b"\x00\x01\x00" b"\x02\x00\x00"
        b"\x00\x00\x03" b"\x00\x04\x00",
    },
    {
        "name": "rggb-2x2",
        "width": 2,
        "height": 2,
        "line_len": 2,
        "phase": raw10p_common.BayerPhase.red_green,
        "input": INPUT_2X2,
        # R G / G B
        "output": b"P6\n2 2\n255\n"
        b"\x01\x00\x00" b"\x00\x02\x00"
        b"\x00\x03\x00" b"\x00\x00\x04",
    },
    {
        "name": "gbrg-2x2",
        "width": 2,
        "height": 2,
        "line_len": 2,
        "phase": raw10p_common.BayerPhase.green_blue,
        "input": INPUT_2X2,
        # G B / R G
        "output": b"P6\n2 2\n255\n"
        b"\x00\x01\x00" b"\x00\x00\x02"
        b"\x03\x00\x00" b"\x00\x04\x00",
    },
    {
        "name": "bggr-2x2",
        "width": 2,
        "height": 2,
        "line_len": 2,
        "phase": raw10p_common.BayerPhase.blue_green,
        "input": INPUT_2X2,
        # B G / G R
        "output": b"P6\n2 2\n255\n"
        b"\x00\x00\x01" b"\x00\x02\x00"
        b"\x00\x03\x00" b"\x04\x00\x00",
    },
    {
        "name": "grbg-4x2-packed",
        "width": 4,
        "height": 2,
        "line_len": 5,
        "phase": raw10p_common.BayerPhase.green_red,
        "input": b"\x0a\x14\x1e\x28\xff\x32\x3c\x46\x50\xff",
        "output": b"P6\n4 2\n255\n"
        b"\x00\x0a\x00" b"\x14\x00\x00" b"\x00\x1e\x00" b"\x28\x00\x00"
        b"\x00\x00\x32" b"\x00\x3c\x00" b"\x00\x00\x46" b"\x00\x50\x00",
    },
]


def read_pnm(buffer, width, height):
    header = raw10p_visualize.get_header(width, height)
    assert buffer.startswith(header), f"error: invalid pnm header: {buffer[:16]}"
    return np.frombuffer(buffer[len(header) :], dtype=np.uint8).reshape(
        (height, width, 3)
    )


class MainTest(raw10p_testing.TestCase):
    def testVisualize(self):
        """visualize test."""
        function_name = "testVisualize"
        for test_case in self.getTestCases(function_name, visualizeTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            geometry = raw10p_common.FrameGeometry(
                test_case["width"], test_case["height"], test_case["line_len"]
            )
            fin = io.BytesIO(test_case["input"])
            fout = io.BytesIO()
            raw10p_visualize.visualize(fin, fout, geometry, test_case["phase"])
            self.compareBuffer(fout.getvalue(), test_case["output"], test_case["name"])
            # the full frame is consumed
            self.assertEqual(len(test_case["input"]), fin.tell())

    def testCanonicalIndexes(self):
        # GRBG: (0, 0) G, (0, 1) R, (1, 0) B, (1, 1) G
        indexes = raw10p_visualize.get_channel_indexes(
            raw10p_common.BayerPhase.green_red
        )
        self.assertEqual(raw10p_visualize.G_INDEX, indexes[0][0])
        self.assertEqual(raw10p_visualize.R_INDEX, indexes[0][1])
        self.assertEqual(raw10p_visualize.B_INDEX, indexes[1][0])
        self.assertEqual(raw10p_visualize.G_INDEX, indexes[1][1])

    def testIndexesFollowOrder(self):
        component_index = {
            "R": raw10p_visualize.R_INDEX,
            "G": raw10p_visualize.G_INDEX,
            "g": raw10p_visualize.G_INDEX,
            "B": raw10p_visualize.B_INDEX,
        }
        for phase in raw10p_common.BayerPhase:
            order = phase.get_order()
            expected_indexes = (
                (component_index[order[0]], component_index[order[1]]),
                (component_index[order[2]], component_index[order[3]]),
            )
            self.assertEqual(
                expected_indexes,
                raw10p_visualize.get_channel_indexes(phase),
                f"error on {phase.name}",
            )

    def testIndexesFollowTrim(self):
        """the trimmed layout of every phase must be the GRBG layout."""
        canonical_indexes = raw10p_visualize.get_channel_indexes(
            raw10p_common.BayerPhase.get_canonical()
        )
        for phase in raw10p_common.BayerPhase:
            indexes = raw10p_visualize.get_channel_indexes(phase)
            trim = phase.get_trim()
            for row in range(2):
                for col in range(2):
                    self.assertEqual(
                        canonical_indexes[row][col],
                        indexes[(row + trim.top) % 2][(col + trim.left) % 2],
                        f"error on {phase.name} {row=} {col=}",
                    )

    def testConvertMatchesVisualize(self):
        """the converted frame shows the same colors as the original one."""
        width, height, line_len = 8, 6, 10
        samples = np.arange(1, width * height + 1, dtype=np.uint8).reshape(
            (height, width)
        )
        buffer = b"".join(
            raw10p_testing.pack_line(row.tolist(), line_len, low=0x5A)
            for row in samples
        )
        geometry = raw10p_common.FrameGeometry(width, height, line_len)
        canonical_indexes = np.array(
            raw10p_visualize.get_channel_indexes(
                raw10p_common.BayerPhase.get_canonical()
            )
        )
        for phase in raw10p_common.BayerPhase:
            # 1. original Bayer layout
            fout = io.BytesIO()
            raw10p_visualize.visualize(io.BytesIO(buffer), fout, geometry, phase)
            rgb = read_pnm(fout.getvalue(), width, height)
            # 2. converted frame, colored as GRBG
            fout = io.BytesIO()
            o_width, o_height = raw10p_normalize.convert(
                io.BytesIO(buffer), fout, geometry, phase
            )
            output = np.frombuffer(fout.getvalue(), dtype=np.uint8).reshape(
                (o_height, o_width)
            )
            o_rgb = np.zeros((o_height, o_width, 3), dtype=np.uint8)
            for row in range(o_height):
                for col in range(o_width):
                    index = canonical_indexes[row % 2][col % 2]
                    o_rgb[row][col][index] = output[row][col]
            # 3. the original, cropped, must match
            trim = phase.get_trim()
            cropped = rgb[
                trim.top : height - trim.bottom, trim.left : width - trim.right
            ]
            np.testing.assert_array_equal(
                cropped, o_rgb, err_msg=f"error on {phase.name}"
            )

    def testWriteFailure(self):
        geometry = raw10p_common.FrameGeometry(2, 2, 2)
        fout = raw10p_testing.ShortWriter(max_size=4)
        with self.assertRaises(raw10p_common.WriteFailure):
            raw10p_visualize.visualize(
                io.BytesIO(INPUT_2X2),
                fout,
                geometry,
                raw10p_common.BayerPhase.green_red,
            )

    def testShortRead(self):
        geometry = raw10p_common.FrameGeometry(2, 2, 2)
        fout = io.BytesIO()
        with self.assertRaises(raw10p_common.ShortRead):
            raw10p_visualize.visualize(
                io.BytesIO(INPUT_2X2[:3]),
                fout,
                geometry,
                raw10p_common.BayerPhase.green_red,
            )
        # header and first line are written
        self.assertEqual(len(b"P6\n2 2\n255\n") + 2 * 3, len(fout.getvalue()))


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
