#!/usr/bin/env python3

"""raw10p_common_unittest.py: raw10p common unittest.

# runme
# $ ./raw10p_common_unittest.py
"""

import sys

import raw10p_common
import raw10p_testing


getTrimTestCases = [
    {
        "name": "rggb",
        "phase": raw10p_common.BayerPhase.red_green,
        "trim": (0, 0, 1, 1),
        "input_size": (640, 480),
        "output_size": (638, 480),
    },
    {
        "name": "grbg",
        "phase": raw10p_common.BayerPhase.green_red,
        "trim": (0, 0, 0, 0),
        "input_size": (640, 480),
        "output_size": (640, 480),
    },
    {
        "name": "gbrg",
        "phase": raw10p_common.BayerPhase.green_blue,
        "trim": (1, 1, 1, 1),
        "input_size": (640, 480),
        "output_size": (638, 478),
    },
    {
        "name": "bggr",
        "phase": raw10p_common.BayerPhase.blue_green,
        "trim": (1, 1, 0, 0),
        "input_size": (640, 480),
        "output_size": (640, 478),
    },
]

frameGeometryTestCases = [
    {
        "name": "no-padding",
        "file_size": 800 * 480,
        "width": 640,
        "height": 480,
        "line_len": 800,
        "error": None,
    },
    {
        "name": "padding",
        "file_size": 832 * 480,
        "width": 640,
        "height": 480,
        "line_len": 832,
        "error": None,
    },
    {
        "name": "minimum-size",
        "file_size": 4,
        "width": 2,
        "height": 2,
        "line_len": 2,
        "error": None,
    },
    {
        "name": "narrow",
        "file_size": 10,
        "width": 1,
        "height": 2,
        "line_len": None,
        "error": raw10p_common.InvalidGeometry,
    },
    {
        "name": "short",
        "file_size": 10,
        "width": 4,
        "height": 1,
        "line_len": None,
        "error": raw10p_common.InvalidGeometry,
    },
    {
        "name": "not-multiple-of-height",
        "file_size": 21,
        "width": 4,
        "height": 4,
        "line_len": None,
        "error": raw10p_common.InvalidGeometry,
    },
    {
        "name": "line-too-short",
        "file_size": 12,
        "width": 4,
        "height": 4,
        "line_len": None,
        "error": raw10p_common.LineTooShort,
    },
]


class MainTest(raw10p_testing.TestCase):
    def testGetTrim(self):
        """BayerPhase.get_trim test."""
        function_name = "testGetTrim"
        for test_case in self.getTestCases(function_name, getTrimTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            phase = test_case["phase"]
            trim = phase.get_trim()
            self.assertEqual(test_case["trim"], trim.to_tuple())
            # pure function: same value every time
            self.assertEqual(trim, phase.get_trim())
            # top/bottom and left/right are always trimmed together
            self.assertEqual(trim.top, trim.bottom)
            self.assertEqual(trim.left, trim.right)
            self.assertEqual(
                test_case["output_size"], trim.get_output_size(*test_case["input_size"])
            )

    def testCanonicalPhase(self):
        canonical = raw10p_common.BayerPhase.get_canonical()
        self.assertEqual(raw10p_common.BayerPhase.green_red, canonical)
        self.assertEqual("GRBg", canonical.get_order())
        self.assertEqual((0, 0, 0, 0), canonical.get_trim().to_tuple())

    def testTrimFollowsOrder(self):
        """dropping the trimmed rows/columns moves the order to GRBG."""
        canonical_order = raw10p_common.BayerPhase.get_canonical().get_order()
        for phase in raw10p_common.BayerPhase:
            order = phase.get_order()
            trim = phase.get_trim()
            cells = [[order[0], order[1]], [order[2], order[3]]]
            shifted = "".join(
                cells[(row + trim.top) % 2][(col + trim.left) % 2]
                for row in range(2)
                for col in range(2)
            )
            self.assertEqual(
                canonical_order.upper(), shifted.upper(), f"error on {phase.name}"
            )

    def testZeroSizedOutput(self):
        for phase in raw10p_common.BayerPhase:
            trim = phase.get_trim()
            if phase == raw10p_common.BayerPhase.green_red:
                self.assertEqual((2, 2), trim.get_output_size(2, 2))
                continue
            with self.assertRaises(raw10p_common.ZeroSizedOutput):
                trim.get_output_size(2, 2)

    def testFrameGeometry(self):
        """FrameGeometry.FromFileSize test."""
        function_name = "testFrameGeometry"
        for test_case in self.getTestCases(function_name, frameGeometryTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            args = (test_case["file_size"], test_case["width"], test_case["height"])
            if test_case["error"] is not None:
                with self.assertRaises(test_case["error"]):
                    raw10p_common.FrameGeometry.FromFileSize(*args)
                continue
            geometry = raw10p_common.FrameGeometry.FromFileSize(*args)
            self.assertEqual(test_case["width"], geometry.width)
            self.assertEqual(test_case["height"], geometry.height)
            self.assertEqual(test_case["line_len"], geometry.line_len)
            self.assertEqual(
                test_case["file_size"], geometry.line_len * geometry.height
            )

    def testErrorTaxonomy(self):
        for error in (
            raw10p_common.UnknownFormat,
            raw10p_common.InvalidGeometry,
            raw10p_common.LineTooShort,
            raw10p_common.ShortRead,
            raw10p_common.WriteFailure,
            raw10p_common.ZeroSizedOutput,
        ):
            self.assertTrue(issubclass(error, raw10p_common.ConversionError))


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
