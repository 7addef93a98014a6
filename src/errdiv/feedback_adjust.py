# SPDX-License-Identifier: LGPL-3-or-later

""" Error feedback adjustment stage in hardware.

Takes the truncating quotient and remainder from a divider unit, along
with the stream's accumulator, and produces the rounded quotient and the
next accumulator, exactly as `errdiv.feedback.divide_with_feedback`
does after its own truncating division.
"""

from nmigen.hdl.ast import Signal, Mux, signed
from nmigen.hdl.dsl import Module
from nmigen.hdl.ir import Elaboratable
from nmigen.cli import rtlil

from errdiv.intwidth import I32, SignedInt
from errdiv.rounding import Rounding


class FeedbackAdjust(Elaboratable):
    """Combinatorial rounding adjustment with error feedback.

    The rounding policy is fixed at construction.

    Properties:
    int_type: SignedInt
        width of every input and output except the 1-bit ones.
    quotient: Signal
        truncating quotient of dividend / divisor
    remainder: Signal
        remainder of the same division, with the dividend's sign
    divisor: Signal
        the (non-zero) divisor
    dividend_neg: Signal
        1 if the dividend was negative
    acc_in: Signal
        the accumulator before this division
    quotient_out: Signal
        the rounded quotient
    acc_out: Signal
        the accumulator after this division
    fallback: Signal
        1 when `acc_in + remainder` overflowed and a whole divisor was
        folded back without consulting the rounding policy
    """

    def __init__(self, int_type=I32, rounding=Rounding.ROUND):
        assert isinstance(int_type, SignedInt)
        self.int_type = int_type
        self.rounding = Rounding(rounding)
        width = int_type.bits
        self.quotient = Signal(signed(width))
        self.remainder = Signal(signed(width))
        self.divisor = Signal(signed(width))
        self.dividend_neg = Signal()
        self.acc_in = Signal(signed(width))
        self.quotient_out = Signal(signed(width))
        self.acc_out = Signal(signed(width))
        self.fallback = Signal()

    def ports(self):
        return [self.quotient, self.remainder, self.divisor,
                self.dividend_neg, self.acc_in,
                self.quotient_out, self.acc_out, self.fallback]

    def _fits(self, v):
        return (v >= self.int_type.min) & (v <= self.int_type.max)

    @staticmethod
    def _magnitude(m, v, name):
        # -v is one bit wider than v, so this is fine even for the
        # most negative value: it lands in the top bit of the result
        mag = Signal(len(v), name=name)
        m.d.comb += mag.eq(Mux(v < 0, -v, v))
        return mag

    def elaborate(self, platform):
        m = Module()
        width = self.int_type.bits

        same = Signal()
        m.d.comb += same.eq(self.dividend_neg == (self.divisor < 0))

        acc_sum = Signal(signed(width + 1))
        m.d.comb += acc_sum.eq(self.acc_in + self.remainder)
        sum_fits = Signal()
        m.d.comb += sum_fits.eq(self._fits(acc_sum))

        # the accumulator after flushing one divisor either way. these
        # are also what the overflow fallback folds to.
        acc_sub = Signal(signed(width + 2))
        acc_add = Signal(signed(width + 2))
        m.d.comb += [acc_sub.eq(acc_sum - self.divisor),
                     acc_add.eq(acc_sum + self.divisor)]

        mag_div = self._magnitude(m, self.divisor, "mag_div")
        mag_acc = self._magnitude(m, acc_sum, "mag_acc")
        mag_sub = self._magnitude(m, acc_sub, "mag_sub")
        mag_add = self._magnitude(m, acc_add, "mag_add")

        at_least = Signal()
        half_at_least = Signal()
        difference_less = Signal()
        sum_less = Signal()
        m.d.comb += [
            at_least.eq(mag_acc >= mag_div),
            half_at_least.eq((mag_acc << 1) >= mag_div),
            difference_less.eq(self._fits(acc_sub) & (mag_sub < mag_div)),
            sum_less.eq(self._fits(acc_add) & (mag_add < mag_div)),
        ]

        if self.rounding is Rounding.FLOOR:
            flush = Mux(same, at_least, sum_less)
        elif self.rounding is Rounding.CEILING:
            flush = Mux(same, difference_less, at_least)
        elif self.rounding is Rounding.ROUND:
            flush = half_at_least
        elif self.rounding is Rounding.TOWARDS_ZERO:
            flush = at_least
        else:
            flush = Mux(same, difference_less, sum_less)

        inexact = Signal()
        m.d.comb += inexact.eq(self.remainder != 0)
        m.d.comb += self.fallback.eq(inexact & ~sum_fits)

        with m.If(~inexact):
            m.d.comb += [self.quotient_out.eq(self.quotient),
                         self.acc_out.eq(self.acc_in)]
        with m.Elif(~sum_fits | flush):
            with m.If(same):
                m.d.comb += [self.quotient_out.eq(self.quotient + 1),
                             self.acc_out.eq(acc_sub)]
            with m.Else():
                m.d.comb += [self.quotient_out.eq(self.quotient - 1),
                             self.acc_out.eq(acc_add)]
        with m.Else():
            m.d.comb += [self.quotient_out.eq(self.quotient),
                         self.acc_out.eq(acc_sum)]
        return m


# run this as simply "python3 feedback_adjust.py" to create an ilang file
# that can be viewed with yosys "read_ilang feedback_adjust.il; show top"
if __name__ == "__main__":
    dut = FeedbackAdjust(I32, Rounding.ROUND)
    vl = rtlil.convert(dut, ports=dut.ports())
    with open("feedback_adjust.il", "w") as f:
        f.write(vl)
