#!/usr/bin/env python3

"""raw10p_convert_unittest.py: raw10p convert unittest.

# runme
# $ ./raw10p_convert_unittest.py
"""

import contextlib
import io
import os
import sys
import tempfile

import raw10p_common
import raw10p_convert
import raw10p_testing


# 4x4 frame, 6-byte lines (1 byte padding), rows 0x01.., 0x11.., 0x21.., 0x31..
ROWS_INPUT = (
    b"\x01\x02\x03\x04\xaa\xee"
    b"\x11\x12\x13\x14\xbb\xee"
    b"\x21\x22\x23\x24\xcc\xee"
    b"\x31\x32\x33\x34\xdd\xee"
)

convertFileTestCases = [
    {
        "name": "pRAA",
        "i_pix_fmt": "pRAA",
        "width": 4,
        "height": 4,
        "input": ROWS_INPUT,
        "output_size": (2, 4),
        "output": b"\x02\x03\x12\x13\x22\x23\x32\x33",
    },
    {
        "name": "SGRBG10P",
        "i_pix_fmt": "SGRBG10P",
        "width": 4,
        "height": 4,
        "input": ROWS_INPUT,
        "output_size": (4, 4),
        "output": b"\x01\x02\x03\x04\x11\x12\x13\x14\x21\x22\x23\x24\x31\x32\x33\x34",
    },
    {
        "name": "pGAA",
        "i_pix_fmt": "pGAA",
        "width": 4,
        "height": 4,
        "input": ROWS_INPUT,
        "output_size": (2, 2),
        "output": b"\x12\x13\x22\x23",
    },
    {
        "name": "pBAA",
        "i_pix_fmt": "pBAA",
        "width": 4,
        "height": 4,
        "input": ROWS_INPUT,
        "output_size": (4, 2),
        "output": b"\x11\x12\x13\x14\x21\x22\x23\x24",
    },
]

mainErrorTestCases = [
    {
        "name": "unknown-format",
        "args": ["-f", "SBGGR10", "-s", "4x4"],
    },
    {
        "name": "small-frame",
        "args": ["-f", "pBAA", "-s", "1x4"],
    },
    {
        "name": "not-multiple-of-height",
        "args": ["-f", "pBAA", "-s", "4x5"],
    },
    {
        "name": "line-too-short",
        "args": ["-f", "pBAA", "-s", "8x4"],
    },
    {
        "name": "zero-sized-output",
        "args": ["-f", "pGAA", "-s", "2x12"],
    },
]


def get_tempfile(suffix):
    return tempfile.NamedTemporaryFile(
        prefix="raw10p_convert_unittest.", suffix=suffix
    ).name


class MainTest(raw10p_testing.TestCase):
    def setUp(self):
        self.infile = get_tempfile(".raw")
        with open(self.infile, "wb") as f:
            f.write(ROWS_INPUT)
        self.outfile = get_tempfile(".bin")
        self.logfile = get_tempfile(".log")

    def tearDown(self):
        bayer_outfile = raw10p_convert.get_bayer_pnm_outfile(self.infile)
        for path in (self.infile, self.outfile, self.logfile, bayer_outfile):
            if os.path.isdir(path):
                os.rmdir(path)
            elif os.path.exists(path):
                os.remove(path)

    def testConvertFile(self):
        """convert_file test."""
        function_name = "testConvertFile"
        for test_case in self.getTestCases(function_name, convertFileTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            with open(self.logfile, "w") as logfd:
                status = raw10p_convert.convert_file(
                    self.infile,
                    self.outfile,
                    test_case["i_pix_fmt"],
                    test_case["width"],
                    test_case["height"],
                    True,
                    logfd,
                    2,
                )
            self.assertIsNone(status["bayer_pnm_error"])
            self.assertEqual(
                test_case["output_size"], (status["width"], status["height"])
            )
            with open(self.outfile, "rb") as f:
                output = f.read()
            self.compareBuffer(output, test_case["output"], test_case["name"])
            # the bayer pnm file keeps the full frame size
            bayer_outfile = raw10p_convert.get_bayer_pnm_outfile(self.infile)
            with open(bayer_outfile, "rb") as f:
                pnm = f.read()
            header = b"P6\n4 4\n255\n"
            self.assertTrue(pnm.startswith(header))
            self.assertEqual(len(header) + 4 * 4 * 3, len(pnm))

    def testMain(self):
        argv = [
            "raw10p_convert.py",
            "-f",
            "SBGGR10P",
            "-s",
            "4x4",
            "-i",
            self.infile,
            "-o",
            self.outfile,
        ]
        self.assertEqual(0, raw10p_convert.main(argv))
        with open(self.outfile, "rb") as f:
            self.assertEqual(b"\x11\x12\x13\x14\x21\x22\x23\x24", f.read())
        # no bayer pnm unless requested
        self.assertFalse(
            os.path.exists(raw10p_convert.get_bayer_pnm_outfile(self.infile))
        )

    def testMainPositional(self):
        # default format is pBAA
        argv = [
            "raw10p_convert.py",
            "--width",
            "4",
            "--height",
            "4",
            "-b",
            "--logfile",
            self.logfile,
            "-d",
            self.infile,
            self.outfile,
        ]
        self.assertEqual(0, raw10p_convert.main(argv))
        with open(self.outfile, "rb") as f:
            self.assertEqual(b"\x11\x12\x13\x14\x21\x22\x23\x24", f.read())
        self.assertTrue(
            os.path.exists(raw10p_convert.get_bayer_pnm_outfile(self.infile))
        )
        with open(self.logfile, "r") as f:
            log = f.read().splitlines()
        self.assertIn("debug: output 4x2", log)

    def testListFormats(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            ret = raw10p_convert.main(["raw10p_convert.py", "-f", "?"])
        self.assertEqual(0, ret)
        self.assertEqual(
            ["Supported formats:", "SRGGB10P", "SGRBG10P", "SGBRG10P", "SBGGR10P"],
            stdout.getvalue().splitlines(),
        )

    def testMainErrors(self):
        """main error test."""
        function_name = "testMainErrors"
        for test_case in self.getTestCases(function_name, mainErrorTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            argv = (
                ["raw10p_convert.py"]
                + test_case["args"]
                + ["-b", "-i", self.infile, "-o", self.outfile]
            )
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                ret = raw10p_convert.main(argv)
            self.assertEqual(1, ret, f"error on {test_case['name']}")
            self.assertTrue(stderr.getvalue().startswith("error: "))
            # nothing is written on a bad frame geometry
            self.assertFalse(
                os.path.exists(self.outfile), f"error on {test_case['name']}"
            )
            self.assertFalse(
                os.path.exists(raw10p_convert.get_bayer_pnm_outfile(self.infile)),
                f"error on {test_case['name']}",
            )

    def testConvertFileErrors(self):
        with self.assertRaises(raw10p_common.UnknownFormat):
            raw10p_convert.convert_file(
                self.infile, self.outfile, "RG10", 4, 4, False, sys.stdout, 0
            )
        with self.assertRaises(raw10p_common.InvalidGeometry):
            raw10p_convert.convert_file(
                self.infile, self.outfile, "pBAA", 4, 5, False, sys.stdout, 0
            )
        with self.assertRaises(FileNotFoundError):
            raw10p_convert.convert_file(
                self.infile + ".missing", self.outfile, "pBAA", 4, 4, False, sys.stdout, 0
            )

    def testBayerPnmErrorKeepsConverting(self):
        # a directory in place of the bayer pnm file makes its open() fail
        os.mkdir(raw10p_convert.get_bayer_pnm_outfile(self.infile))
        with open(self.logfile, "w") as logfd:
            status = raw10p_convert.convert_file(
                self.infile, self.outfile, "pBAA", 4, 4, True, logfd, 0
            )
        self.assertIsInstance(status["bayer_pnm_error"], OSError)
        with open(self.outfile, "rb") as f:
            self.assertEqual(b"\x11\x12\x13\x14\x21\x22\x23\x24", f.read())
        # main reports the error
        argv = ["raw10p_convert.py", "-b", "-s", "4x4", self.infile, self.outfile]
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            ret = raw10p_convert.main(argv)
        self.assertEqual(1, ret)
        self.assertTrue(stderr.getvalue().startswith("error: bayer pnm: "))

    def testBayerPnmAndOutputErrors(self):
        # both passes fail: both errors are reported
        os.mkdir(raw10p_convert.get_bayer_pnm_outfile(self.infile))
        os.mkdir(self.outfile)
        with self.assertRaises(OSError) as cm:
            raw10p_convert.convert_file(
                self.infile, self.outfile, "pBAA", 4, 4, True, sys.stdout, 0
            )
        self.assertIsInstance(cm.exception.bayer_pnm_error, OSError)
        argv = ["raw10p_convert.py", "-b", "-s", "4x4", self.infile, self.outfile]
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            ret = raw10p_convert.main(argv)
        self.assertEqual(1, ret)
        lines = stderr.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertTrue(lines[0].startswith("error: bayer pnm: "))
        self.assertTrue(lines[1].startswith("error: "))
        self.assertFalse(lines[1].startswith("error: bayer pnm: "))


if __name__ == "__main__":
    raw10p_testing.main(sys.argv)
