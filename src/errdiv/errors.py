# SPDX-License-Identifier: LGPL-3-or-later


class DivisionError(ArithmeticError):
    """ base class of everything the dividers raise for a bad division """


class DivisionByZero(DivisionError, ZeroDivisionError):
    pass


class DivisionOverflow(DivisionError, OverflowError):
    """ the quotient, or a rounding adjustment to it or to the
    accumulator, doesn't fit in the operand width """
