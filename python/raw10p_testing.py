#!/usr/bin/env python3

"""raw10p_testing.py: raw10p unittest helpers.

Operation:
$ ./*_unittest.py  # run all the tests
$ ./*_unittest.py --list_tests  # list all available tests
$ ./*_unittest.py --filter <filter>
where:
  <filter> := <test_filter_item> [":" <test_filter_item>]*
  <test_filter_item> := <test_function>.<test_name>
  <test_function> := <string> | "*"
  <test_name> := <string> | "*"

Examples:
```
$ ./*_unittest.py --filter testConvert.*
$ ./*_unittest.py --filter *.bggr*:*.rggb*
```
"""

import argparse
import fnmatch
import io
import numpy as np
import sys
import unittest

# set by main() when running a test file directly
FILTER = None
LIST_TESTS = False


class TestCase(unittest.TestCase):
    def getTestCases(self, function_name, test_case_list):
        if LIST_TESTS:
            print(f" {function_name}.")
            for test_case in test_case_list:
                print(f"  {function_name}.{test_case['name']}")
            self.skipTest("list test")

        return self.filterTestCases(function_name, test_case_list, FILTER)

    def filterTestCases(self, function_name, test_case_list, filter_string):
        if not filter_string:
            return test_case_list

        # each filter item is of the form TestFunction.TestName, supports '*'
        filters = filter_string.split(":")
        matched_test_case_name_list = set()
        for filt in filters:
            try:
                func_pat, case_pat = filt.split(".", 1)
            except ValueError:
                continue  # skip invalid filters
            if fnmatch.fnmatch(function_name, func_pat):
                for test_case in test_case_list:
                    if fnmatch.fnmatch(test_case["name"], case_pat):
                        matched_test_case_name_list.add(test_case["name"])
        return list(
            test_case
            for test_case in test_case_list
            if test_case["name"] in matched_test_case_name_list
        )

    # function to compare 2 buffer representations
    @classmethod
    def compareBuffer(cls, buffer, expected_buffer, label):
        assert len(buffer) == len(
            expected_buffer
        ), f"error on {label} case: wrong size ({len(buffer)} != {len(expected_buffer)})"
        np.testing.assert_array_equal(
            np.frombuffer(buffer, dtype=np.uint8),
            np.frombuffer(expected_buffer, dtype=np.uint8),
            err_msg=f"error on {label} case",
        )


# output stream that accepts at most max_size bytes per write
class ShortWriter(io.RawIOBase):
    def __init__(self, max_size):
        self.max_size = max_size
        self.data = bytearray()

    def writable(self):
        return True

    def write(self, b):
        size = min(len(b), self.max_size)
        self.data += bytes(b[:size])
        return size


# build a packed line: 4 samples (MSBs) per 5 bytes, plus padding
def pack_line(samples, line_len, low=0x00, padding=0x00):
    line = bytearray()
    for i in range(0, len(samples), 4):
        item = list(samples[i : i + 4])
        line += bytes(item)
        if len(item) == 4:
            line.append(low)
    assert len(line) <= line_len, f"error: line_len too short ({line_len})"
    line += bytes([padding] * (line_len - len(line)))
    return bytes(line)


def main(argv):
    global FILTER
    global LIST_TESTS

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--list_tests",
        action="store_true",
        dest="list_tests",
        default=False,
        help="List Tests",
    )
    parser.add_argument(
        "--filter",
        dest="filter",
        default=None,
        metavar="filter",
        help="Filter String",
    )

    options, unknown_options = parser.parse_known_args(argv[1:])
    FILTER = options.filter
    LIST_TESTS = options.list_tests
    # clean sys.argv before passing to unittest
    sys.argv = [argv[0]] + unknown_options
    unittest.main(module="__main__")
