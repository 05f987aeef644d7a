from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class MantissaDivider(wiring.Component):
    """Unrolled restoring divider for FP32 significands

    26 compare/subtract stages produce the integer bit, 23 fraction bits and
    guard/round of 1.a_mant / 1.b_mant. The quotient output appends a sticky
    bit set when a remainder is left.
    """

    a_mant: In(23)
    b_mant: In(23)
    quotient: Out(27)

    STAGES = 26

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        numerator = Signal(25)
        denominator = Signal(24)

        m.d.comb += numerator.eq(Cat(self.a_mant, Const(1, 1)))
        m.d.comb += denominator.eq(Cat(self.b_mant, Const(1, 1)))

        # remainder stays below 2 * denominator, so 25 bits suffice
        partial = numerator
        bits = []
        for i in range(self.STAGES):
            q_bit = Signal(name=f"q_{i}")
            remainder = Signal(25, name=f"rem_{i}")
            m.d.comb += q_bit.eq(partial >= denominator)
            m.d.comb += remainder.eq(Mux(q_bit, partial - denominator, partial))

            shifted = Signal(25, name=f"shifted_{i}")
            m.d.comb += shifted.eq(remainder << 1)

            bits.append(q_bit)
            partial = shifted

        sticky = Signal()
        m.d.comb += sticky.eq(partial != 0)

        # Cat is LSB first: sticky, then the last quotient bit up to the first
        m.d.comb += self.quotient.eq(Cat(sticky, *reversed(bits)))

        return m
