# SPDX-License-Identifier: LGPL-3-or-later

""" Overflow-safe magnitude comparisons.

`abs(x)` is not representable for the most-negative value of a fixed
width, and `a + b` / `a - b` overflow when `a` is an accumulator sitting
near the edge of the range. Each predicate here is answered using only
values the width `int_type` can hold: magnitudes as unsigned values of
the same width, sums and differences through the checked operations.
"""


def magnitude_at_least(a, b, int_type):
    """`|a| >= |b|`"""
    return int_type.unsigned_abs(a) >= int_type.unsigned_abs(b)


def magnitude_half_at_least(a, b, int_type):
    """`2 * |a| >= |b|`"""
    doubled = int_type.unsigned_abs(a) << 1
    if doubled > int_type.unsigned_max:
        # |a| is at least half the unsigned range, no |b| is bigger
        return True
    return doubled >= int_type.unsigned_abs(b)


def sum_magnitude_less(a, b, int_type):
    """`a + b` is representable and `|a + b| < |b|`"""
    total = int_type.checked_add(a, b)
    if total is None:
        return False
    return int_type.unsigned_abs(total) < int_type.unsigned_abs(b)


def difference_magnitude_less(a, b, int_type):
    """`a - b` is representable and `|a - b| < |b|`"""
    difference = int_type.checked_sub(a, b)
    if difference is None:
        return False
    return int_type.unsigned_abs(difference) < int_type.unsigned_abs(b)


def same_sign(a, b):
    # zero counts as positive; callers only pass non-zero operands
    return (a < 0) == (b < 0)
