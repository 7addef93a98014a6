# SPDX-License-Identifier: LGPL-3-or-later

""" Consistency checks for the error feedback divider.

Each check splits one division into many smaller ones fed through a
shared `Accumulator` and compares the summed quotients and the final
accumulator with what a single division of the whole gives.

run as "python3 -m errdiv.selfcheck": prints every mismatch found over
a table of cases, then "done".
"""

from dataclasses import dataclass, fields
from errdiv.feedback import Accumulator, divide_with_feedback
from errdiv.intwidth import I32
from errdiv.rounding import Rounding


@dataclass(frozen=True)
class Mismatch:
    check: str
    "name of the check that failed"

    dividend: int
    "the total divided"

    divisor: int
    rounding: Rounding

    quotient: int
    "sum of the quotients returned piecewise"

    error: int
    "accumulator left after the piecewise divisions"

    expected_quotient: int
    expected_error: int

    def __str__(self):
        return ", ".join(f"{field.name}={getattr(self, field.name)}"
                         for field in fields(self))


def check_repeated(dividend, divisor, rounding, int_type=I32):
    """divide `dividend` by `divisor` `|divisor|` times over. The
    quotients must add up to exactly `±dividend` and the accumulator must
    come back to 0. returns None or a `Mismatch`.
    """
    acc = Accumulator(0, int_type)
    quotient = 0
    for _ in range(abs(divisor)):
        quotient += divide_with_feedback(dividend, divisor, rounding, acc)
    expected = dividend if divisor > 0 else -dividend
    if quotient == expected and acc.value == 0:
        return None
    return Mismatch("repeated", dividend * abs(divisor), divisor,
                    Rounding(rounding), quotient, acc.value, expected, 0)


def fibonacci_terms(limit, start):
    """terms of `1, start, 1 + start, ...` (the first two aren't
    emitted), negated if `limit` is negative, for as long as their
    running sum stays within `|limit|`."""
    sign = -1 if limit < 0 else 1
    i0, i1 = 1, start
    total = 0
    while True:
        ix = i0 + i1
        if ix + total > abs(limit):
            return
        yield sign * ix
        i0, i1 = i1, ix
        total += ix


def check_fibonacci(limit, divisor, start, rounding, int_type=I32):
    """feed `fibonacci_terms(limit, start)` one at a time and compare
    against a single division of their sum. returns None or a
    `Mismatch`.
    """
    acc = Accumulator(0, int_type)
    quotient = 0
    total = 0
    for term in fibonacci_terms(limit, start):
        quotient += divide_with_feedback(term, divisor, rounding, acc)
        total += term

    expected_acc = Accumulator(0, int_type)
    expected = divide_with_feedback(total, divisor, rounding, expected_acc)
    if quotient == expected and acc.value == expected_acc.value:
        return None
    return Mismatch("fibonacci", total, divisor, Rounding(rounding),
                    quotient, acc.value, expected, expected_acc.value)


def check_all(limit, divisor, start, int_type=I32):
    """run both checks for every rounding and every combination of signs
    of `limit` and `divisor`. returns the list of mismatches."""
    mismatches = []
    for a, b in ((limit, divisor), (-limit, divisor),
                 (limit, -divisor), (-limit, -divisor)):
        for rounding in Rounding:
            mismatch = check_repeated(a, b, rounding, int_type)
            if mismatch is not None:
                mismatches.append(mismatch)
        for rounding in Rounding:
            mismatch = check_fibonacci(a, b, start, rounding, int_type)
            if mismatch is not None:
                mismatches.append(mismatch)
    return mismatches


CASES = [(14, 3, 1)]
for _limit in (11000, 1100, 110001, 11001, 1000, 100, 10001, 1001):
    for _start in (3, 1):
        for _divisor in (13, 17, 217):
            CASES.append((_limit, _divisor, _start))
for _limit in (10001, 1001):
    for _divisor in (12, 16, 212):
        CASES.append((_limit, _divisor, 1))
del _limit, _start, _divisor


def main():
    for limit, divisor, start in CASES:
        for mismatch in check_all(limit, divisor, start):
            print(mismatch)
    print("done")


if __name__ == "__main__":
    main()
