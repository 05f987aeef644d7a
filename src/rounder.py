from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class Rounder(wiring.Component):
    """Round-to-nearest-even on a 24-bit significand (hidden bit included)

    gr carries the guard bit in bit 1 and the round bit in bit 0.
    - gr < 2: truncate
    - gr == 2: round up if sticky, otherwise round to even
    - gr == 3: round up
    carry is set when rounding ripples into bit 24; the fraction is then the
    renormalized (shifted) value.
    """

    mantissa_in: In(24)
    gr: In(2)
    sticky: In(1)
    fraction_out: Out(23)
    carry: Out(1)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        lsb = self.mantissa_in[0]

        round_up = Signal()
        with m.Switch(self.gr):
            with m.Case(2):
                m.d.comb += round_up.eq(self.sticky | lsb)
            with m.Case(3):
                m.d.comb += round_up.eq(1)
            with m.Default():
                m.d.comb += round_up.eq(0)

        incremented = Signal(25)
        m.d.comb += incremented.eq(self.mantissa_in + round_up)

        m.d.comb += self.carry.eq(incremented[24])
        with m.If(incremented[24]):
            m.d.comb += self.fraction_out.eq(incremented[1:24])
        with m.Else():
            m.d.comb += self.fraction_out.eq(incremented[0:23])

        return m
