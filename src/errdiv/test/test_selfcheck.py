# SPDX-License-Identifier: LGPL-3-or-later

from contextlib import redirect_stdout
from dataclasses import FrozenInstanceError
import io
import unittest
from errdiv.intwidth import I16
from errdiv.rounding import Rounding
from errdiv.selfcheck import (CASES, Mismatch, check_all, check_fibonacci,
                              check_repeated, fibonacci_terms, main)


class TestSelfCheck(unittest.TestCase):
    def test_fibonacci_terms(self):
        self.assertEqual(list(fibonacci_terms(14, 1)), [2, 3, 5])
        self.assertEqual(list(fibonacci_terms(-14, 1)), [-2, -3, -5])
        self.assertEqual(list(fibonacci_terms(30, 3)), [4, 7, 11])
        self.assertEqual(list(fibonacci_terms(1, 1)), [])

    def test_repeated(self):
        for rounding in Rounding:
            for a, b in ((14, 3), (-14, 3), (14, -3), (-14, -3),
                         (1001, 12), (-10001, 212)):
                with self.subTest(a=a, b=b, rounding=rounding):
                    self.assertIsNone(check_repeated(a, b, rounding))

    def test_fibonacci(self):
        for rounding in Rounding:
            for limit, divisor, start in ((14, 3, 1), (11000, -13, 3),
                                          (-1100, 17, 1), (-1001, -16, 1)):
                with self.subTest(limit=limit, divisor=divisor,
                                  rounding=rounding):
                    self.assertIsNone(
                        check_fibonacci(limit, divisor, start, rounding))

    def test_narrow_width(self):
        self.assertEqual(check_all(1000, 17, 3, I16), [])

    def test_cases(self):
        self.assertEqual(len(CASES), 1 + 8 * 2 * 3 + 2 * 3)
        self.assertEqual(CASES[0], (14, 3, 1))
        for limit, divisor, start in CASES[:12]:
            with self.subTest(limit=limit, divisor=divisor, start=start):
                self.assertEqual(check_all(limit, divisor, start), [])

    def test_main(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main()
        self.assertEqual(out.getvalue(), "done\n")

    def test_mismatch_str(self):
        mismatch = Mismatch("repeated", 42, 3, Rounding.FLOOR, 13, 1, 14, 0)
        self.assertEqual(str(mismatch),
                         "check=repeated, dividend=42, divisor=3, "
                         "rounding=Rounding.FLOOR, quotient=13, error=1, "
                         "expected_quotient=14, expected_error=0")
        self.assertEqual(
            mismatch, Mismatch("repeated", 42, 3, Rounding.FLOOR, 13, 1, 14, 0))
        with self.assertRaises(FrozenInstanceError):
            mismatch.quotient = 14


if __name__ == '__main__':
    unittest.main()
