#!/usr/bin/env python3

"""raw10p_formats_unittest.py: raw10p formats unittest.

# runme
# $ ./raw10p_formats_unittest.py
"""

import sys

import raw10p_common
import raw10p_formats
import raw10p_testing


lookupTestCases = [
    {
        "name": "pRAA",
        "i_pix_fmt": "pRAA",
        "phase": raw10p_common.BayerPhase.red_green,
        "short_name": "SRGGB10P",
    },
    {
        "name": "pgAA",
        "i_pix_fmt": "pgAA",
        "phase": raw10p_common.BayerPhase.green_red,
        "short_name": "SGRBG10P",
    },
    {
        "name": "pGAA",
        "i_pix_fmt": "pGAA",
        "phase": raw10p_common.BayerPhase.green_blue,
        "short_name": "SGBRG10P",
    },
    {
        "name": "pBAA",
        "i_pix_fmt": "pBAA",
        "phase": raw10p_common.BayerPhase.blue_green,
        "short_name": "SBGGR10P",
    },
    {
        "name": "alias-v4l2",
        "i_pix_fmt": "SGBRG10P",
        "phase": raw10p_common.BayerPhase.green_blue,
        "short_name": "SGBRG10P",
    },
    {
        "name": "alias-mipi",
        "i_pix_fmt": "MIPI-RAW10-RGGB",
        "phase": raw10p_common.BayerPhase.red_green,
        "short_name": "SRGGB10P",
    },
]

unknownFormatTestCases = [
    {"name": "empty", "i_pix_fmt": ""},
    {"name": "lowercase", "i_pix_fmt": "sbggr10p"},
    {"name": "unpacked", "i_pix_fmt": "SBGGR10"},
    {"name": "8-bit", "i_pix_fmt": "bayer_grbg8"},
    {"name": "display-name", "i_pix_fmt": "SRGGB10P (RGRG... GBGB... ; 'pRAA')"},
    {"name": "none", "i_pix_fmt": None},
]


class MainTest(raw10p_testing.TestCase):
    def testLookup(self):
        """lookup test."""
        function_name = "testLookup"
        for test_case in self.getTestCases(function_name, lookupTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            phase, name = raw10p_formats.lookup(test_case["i_pix_fmt"])
            self.assertEqual(test_case["phase"], phase)
            self.assertEqual(
                test_case["short_name"], raw10p_formats.get_short_name(name)
            )

    def testUnknownFormat(self):
        """lookup failure test."""
        function_name = "testUnknownFormat"
        for test_case in self.getTestCases(function_name, unknownFormatTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            with self.assertRaises(raw10p_common.UnknownFormat):
                raw10p_formats.lookup(test_case["i_pix_fmt"])

    def testListAll(self):
        expected_short_names = ["SRGGB10P", "SGRBG10P", "SGBRG10P", "SBGGR10P"]
        names = raw10p_formats.list_all()
        self.assertEqual(
            expected_short_names,
            list(raw10p_formats.get_short_name(name) for name in names),
        )
        # restartable
        self.assertEqual(names, raw10p_formats.list_all())
        # every listed name can be looked up by its short name
        phases = list(
            raw10p_formats.lookup(raw10p_formats.get_short_name(name))[0]
            for name in names
        )
        self.assertEqual(list(raw10p_common.BayerPhase), phases)

    def testDefaultFormat(self):
        self.assertEqual(
            raw10p_common.BayerPhase.blue_green,
            raw10p_formats.lookup(raw10p_formats.DEFAULT_PIX_FMT)[0],
        )


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
