from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class MantissaMultiplier(wiring.Component):
    """24x24 shift-and-add array multiplier for FP32 significands

    product: exact 48-bit product of 1.a_mant and 1.b_mant
    framed: product >> 20 with the dropped bits ORed into bit 0
      bit 0 sticky, bits 1-2 guard/round, bits 3-25 fraction, bits 26-27 integer
    """

    a_mant: In(23)
    b_mant: In(23)
    product: Out(48)
    framed: Out(28)

    STICKY_SPAN = 20

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        a_full = Signal(24)
        b_full = Signal(24)

        m.d.comb += a_full.eq(Cat(self.a_mant, Const(1, 1)))
        m.d.comb += b_full.eq(Cat(self.b_mant, Const(1, 1)))

        # ---- Partial Products ----
        rows = [Signal(48, name=f"row_{i}") for i in range(24)]
        for i in range(24):
            m.d.comb += rows[i].eq(Mux(a_full[i], b_full << i, 0))

        # ---- Accumulate ----
        acc = [Signal(48, name=f"acc_{i}") for i in range(24)]
        m.d.comb += acc[0].eq(rows[0])
        for i in range(1, 24):
            m.d.comb += acc[i].eq(acc[i - 1] + rows[i])

        m.d.comb += self.product.eq(acc[23])

        # ---- Frame with Sticky ----
        sticky = Signal()
        m.d.comb += sticky.eq(self.product[0 : self.STICKY_SPAN].any())
        m.d.comb += self.framed.eq(self.product[self.STICKY_SPAN :] | sticky)

        return m
