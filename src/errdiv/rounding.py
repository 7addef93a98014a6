# SPDX-License-Identifier: LGPL-3-or-later

""" Stateless integer division with a selectable rounding policy.
"""

import enum

from errdiv.divmod import trunc_rems
from errdiv.errors import DivisionByZero, DivisionOverflow
from errdiv.intwidth import I32
from errdiv.magnitude import magnitude_half_at_least, same_sign


class Rounding(enum.Enum):
    """which integer a fractional quotient is mapped to"""
    ROUND = "round"
    "nearest, ties away from zero"
    FLOOR = "floor"
    "towards negative infinity"
    CEILING = "ceiling"
    "towards positive infinity"
    TOWARDS_ZERO = "towards_zero"
    "truncate"
    AWAY_FROM_ZERO = "away_from_zero"
    "magnitude always rounds up"


def trunc_divrem(dividend, divisor, int_type):
    """check the operands and return the truncating quotient and the
    remainder (which has the sign of `dividend`, or is zero).

    Raises `DivisionByZero` when `divisor` is 0, and `DivisionOverflow`
    when the quotient doesn't fit in `int_type` (`min / -1`).
    """
    int_type.check(dividend, "dividend")
    int_type.check(divisor, "divisor")
    if divisor == 0:
        raise DivisionByZero(f"{dividend} / 0")
    q = int_type.checked_div(dividend, divisor)
    if q is None:
        raise DivisionOverflow(
            f"{dividend} / {divisor} does not fit in {int_type}")
    # |q * divisor| <= |dividend| and |remainder| < |divisor|
    return q, trunc_rems(dividend, divisor)


def adjust_quotient(q, step, int_type):
    """`q + step`, raising `DivisionOverflow` rather than leaving the range"""
    retval = int_type.checked_add(q, step)
    if retval is None:
        raise DivisionOverflow(
            f"rounding {q} by {step:+d} does not fit in {int_type}")
    return retval


def divide(dividend, divisor, rounding, int_type=I32):
    """divide `dividend` by `divisor`, rounding the quotient by `rounding`.

    Parameters:
    dividend: int
    divisor: int
        non-zero
    rounding: Rounding | str
        the rounding policy, or its value (e.g. `"floor"`)
    int_type: SignedInt
        the width both operands and the quotient are held in.
    Returns: int
        the rounded quotient.
    """
    rounding = Rounding(rounding)
    q, r = trunc_divrem(dividend, divisor, int_type)
    if r == 0:
        return q
    same = same_sign(dividend, divisor)
    if rounding is Rounding.TOWARDS_ZERO:
        step = 0
    elif rounding is Rounding.FLOOR:
        step = 0 if same else -1
    elif rounding is Rounding.CEILING:
        step = 1 if same else 0
    elif rounding is Rounding.AWAY_FROM_ZERO:
        step = 1 if same else -1
    elif magnitude_half_at_least(r, divisor, int_type):
        step = 1 if same else -1
    else:
        step = 0
    return adjust_quotient(q, step, int_type)
