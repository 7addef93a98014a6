# SPDX-License-Identifier: LGPL-3-or-later

""" Division with error feedback.

Dividing a stream of related dividends by the same divisor and rounding
each quotient on its own lets the rounding error pile up: the quotients
drift away from the quotient of the summed dividends. Here the error
left by each call is kept in a caller-owned `Accumulator` and added to
the next call's remainder, flushing whole divisors into the quotient as
soon as the accumulated error says so. The quotients returned so far
then always sum to the rounded quotient of the dividends so far, in the
same way error diffusion dithering keeps the average of an image's
quantized pixels honest.

e.g. `20, 20, 20` divided by `3` with `Rounding.ROUND`:
```
acc = Accumulator()
[divide_with_feedback(20, 3, Rounding.ROUND, acc) for _ in range(3)]
# -> [7, 6, 7], acc.value ends up 0, and 7 + 6 + 7 == 60 / 3
```
"""

from dataclasses import dataclass
from errdiv.errors import DivisionByZero, DivisionOverflow
from errdiv.intwidth import I32, SignedInt
from errdiv.magnitude import (difference_magnitude_less, magnitude_at_least,
                              magnitude_half_at_least, same_sign,
                              sum_magnitude_less)
from errdiv.rounding import Rounding, adjust_quotient, trunc_divrem


@dataclass
class Accumulator:
    """The signed remainder still owed to future divisions of one stream.

    Owned by the caller and threaded through successive
    `divide_with_feedback` calls, which update `value` in place. Not
    thread-safe: give every stream its own.
    """
    value: int = 0
    int_type: SignedInt = I32

    def __post_init__(self):
        self.int_type.check(self.value, "accumulator")

    def reset(self):
        self.value = 0


def _flush_step(acc, divisor, same, rounding, int_type):
    """decide whether one divisor moves from `acc` into the quotient.

    returns +1 for `acc -= divisor; q += 1`, -1 for
    `acc += divisor; q -= 1` and 0 to leave both alone. The sum and
    difference predicates look at where `acc` lands *after* the flush
    without having to perform it first.
    """
    if rounding is Rounding.FLOOR:
        if same:
            flush = magnitude_at_least(acc, divisor, int_type)
        else:
            flush = sum_magnitude_less(acc, divisor, int_type)
    elif rounding is Rounding.CEILING:
        if same:
            flush = difference_magnitude_less(acc, divisor, int_type)
        else:
            flush = magnitude_at_least(acc, divisor, int_type)
    elif rounding is Rounding.ROUND:
        flush = magnitude_half_at_least(acc, divisor, int_type)
    elif rounding is Rounding.TOWARDS_ZERO:
        flush = magnitude_at_least(acc, divisor, int_type)
    else:
        if same:
            flush = difference_magnitude_less(acc, divisor, int_type)
        else:
            flush = sum_magnitude_less(acc, divisor, int_type)
    if not flush:
        return 0
    return 1 if same else -1


def divide_with_feedback(dividend, divisor, rounding, accumulator):
    """divide `dividend` by `divisor`, feeding the rounding error through
    `accumulator`.

    Parameters:
    dividend: int
    divisor: int
        non-zero. Every call sharing `accumulator` should use the same
        divisor and rounding.
    rounding: Rounding | str
    accumulator: Accumulator
        its `int_type` is the width of the operands and quotient. Only
        updated when the call succeeds.
    Returns: int
        this call's quotient.

    An exact division returns its quotient and leaves the accumulator
    alone. When adding the remainder to the accumulator would overflow,
    a whole divisor is folded back in the opposite direction instead of
    consulting the rounding policy; `accumulator.value` still ends up as
    the old value plus `dividend - divisor * quotient`.
    """
    rounding = Rounding(rounding)
    int_type = accumulator.int_type
    acc = int_type.check(accumulator.value, "accumulator")
    q, r = trunc_divrem(dividend, divisor, int_type)
    if r == 0:
        return q
    same = same_sign(dividend, divisor)
    total = int_type.checked_add(acc, r)
    if total is None:
        # acc is within one divisor of the boundary r pushes towards.
        # r and divisor share a sign in the first case and not in the
        # second, so the fold itself stays smaller than the divisor.
        if same:
            step = 1
            total = int_type.checked_add(acc, r - divisor)
        else:
            step = -1
            total = int_type.checked_add(acc, r + divisor)
    else:
        step = _flush_step(total, divisor, same, rounding, int_type)
        if step > 0:
            total = int_type.checked_sub(total, divisor)
        elif step < 0:
            total = int_type.checked_add(total, divisor)
    if total is None:
        raise DivisionOverflow(
            f"accumulator {acc} can't absorb {dividend} / {divisor} "
            f"in {int_type}")
    q = adjust_quotient(q, step, int_type)
    accumulator.value = total
    return q


def divide_with_error(dividend, divisor, rounding, error=0, int_type=I32):
    """like `divide_with_feedback`, but takes the carried error as a plain
    int and returns `(quotient, new_error)` instead of updating an
    `Accumulator`.
    """
    accumulator = Accumulator(error, int_type)
    q = divide_with_feedback(dividend, divisor, rounding, accumulator)
    return q, accumulator.value


class FeedbackDivider:
    """divides one stream of dividends by a fixed divisor, keeping the
    stream's `Accumulator`.

    ```
    div = FeedbackDivider(3, Rounding.ROUND)
    assert list(div.divide_all([20, 20, 20])) == [7, 6, 7]
    ```
    """

    def __init__(self, divisor, rounding, int_type=I32, error=0):
        int_type.check(divisor, "divisor")
        if divisor == 0:
            raise DivisionByZero("divisor is 0")
        self.divisor = divisor
        self.rounding = Rounding(rounding)
        self.accumulator = Accumulator(error, int_type)

    def __call__(self, dividend):
        return divide_with_feedback(dividend, self.divisor, self.rounding,
                                    self.accumulator)

    def divide_all(self, dividends):
        for dividend in dividends:
            yield self(dividend)

    def reset(self):
        self.accumulator.reset()

    def __repr__(self):
        return (f"{self.__class__.__name__}({self.divisor!r}, "
                f"{self.rounding}, {self.accumulator!r})")
