# SPDX-License-Identifier: LGPL-3-or-later

""" Fixed-width two's complement signed integers.

Python ints never overflow, so the width a division is performed at is
carried around explicitly as a `SignedInt`. The dividers only ever
produce intermediate values through the checked operations here, which
answer `None` rather than return something the width can't represent.
"""

from dataclasses import dataclass
from errdiv.divmod import trunc_divs


@dataclass(frozen=True)
class SignedInt:
    """A two's complement signed integer type `bits` wide.

    `min` is the single most-negative value with no positive
    counterpart, so magnitudes are handed out as unsigned values of the
    same width (`unsigned_abs`) rather than by negating.
    """
    bits: int

    def __post_init__(self):
        bits = self.bits
        if not isinstance(bits, int) or isinstance(bits, bool) or bits < 2:
            raise ValueError(f"invalid signed integer width: {bits!r}")

    @property
    def min(self):
        return -1 << (self.bits - 1)

    @property
    def max(self):
        return (1 << (self.bits - 1)) - 1

    @property
    def unsigned_max(self):
        return (1 << self.bits) - 1

    def __str__(self):
        return f"i{self.bits}"

    def __contains__(self, value):
        return (isinstance(value, int) and not isinstance(value, bool)
                and self.min <= value <= self.max)

    def check(self, value, name="value"):
        """return `value` if it is an `int` this type can hold, otherwise
        raise `TypeError` / `ValueError`.
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{name} must be an int, "
                            f"not {type(value).__name__}")
        if not self.min <= value <= self.max:
            raise ValueError(f"{name} {value} does not fit in {self}")
        return value

    def wrap(self, value):
        """truncate any int to this width, like assigning it to a
        register of `bits` bits"""
        value &= self.unsigned_max
        if value > self.max:
            value -= 1 << self.bits
        return value

    def checked_add(self, a, b):
        """`a + b`, or None if it isn't representable"""
        retval = a + b
        if self.min <= retval <= self.max:
            return retval
        return None

    def checked_sub(self, a, b):
        """`a - b`, or None if it isn't representable"""
        retval = a - b
        if self.min <= retval <= self.max:
            return retval
        return None

    def checked_div(self, a, b):
        """truncating `a / b`, or None for division by zero and for
        `min / -1`"""
        if b == 0:
            return None
        retval = trunc_divs(a, b)
        if retval > self.max:
            return None
        return retval

    def unsigned_abs(self, value):
        # wrapping negation read back as unsigned: |min| == 1 << (bits - 1)
        if value < 0:
            return -value & self.unsigned_max
        return value


I8 = SignedInt(8)
I16 = SignedInt(16)
I32 = SignedInt(32)
I64 = SignedInt(64)
I128 = SignedInt(128)

_STANDARD_TYPES = {t.bits: t for t in (I8, I16, I32, I64, I128)}


def signed_int(bits):
    """get the `SignedInt` for `bits`, sharing the standard instances"""
    try:
        return _STANDARD_TYPES[bits]
    except (KeyError, TypeError):
        return SignedInt(bits)
