from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from fp32 import Float32
from rounder import Rounder


class Normalizer(wiring.Component):
    """Normalize and round an unsigned magnitude into a Float32

    The leading one is moved to bit 23. Right shifts keep the last two bits
    shifted out as guard/round and OR the rest into sticky; left shifts are
    exact. The provisional exponent is the exponent the value would have if
    its leading one already sat at bit 23. It is taken modulo 256, as is the
    result exponent (no overflow/underflow detection).

    - Priority encoder: width-deep mux chain
    - For FP32 multiply: width 28, divide: width 27, add: width 28
    """

    def __init__(self, width: int = 28):
        self.width = width

        super().__init__(
            {
                "value": In(width),
                "exponent": In(8),
                "sign": In(1),
                "result": Out(Float32),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.rounder = rounder = Rounder()

        # ---- Leading One ----
        lead = Signal(range(self.width))
        lead_result = 0
        for i in range(self.width):
            lead_result = Mux(self.value[i], i, lead_result)
        m.d.comb += lead.eq(lead_result)

        # ---- Shift ----
        mantissa = Signal(24)
        gr = Signal(2)
        sticky = Signal()
        shifted_exp = Signal(8)

        with m.Switch(lead):
            for p in range(self.width):
                with m.Case(p):
                    m.d.comb += shifted_exp.eq(self.exponent + (p - 23) % 256)
                    if p > 23:
                        s = p - 23
                        m.d.comb += mantissa.eq(self.value[s : p + 1])
                        if s == 1:
                            m.d.comb += gr.eq(Cat(Const(0, 1), self.value[0]))
                        else:
                            m.d.comb += gr.eq(self.value[s - 2 : s])
                        if s > 2:
                            m.d.comb += sticky.eq(self.value[0 : s - 2].any())
                    else:
                        m.d.comb += mantissa.eq(self.value[0 : p + 1] << (23 - p))

        # ---- Round ----
        m.d.comb += [
            rounder.mantissa_in.eq(mantissa),
            rounder.gr.eq(gr),
            rounder.sticky.eq(sticky),
        ]

        # ---- Pack Result ----
        with m.If(self.value == 0):
            m.d.comb += [
                self.result.mantissa.eq(0),
                self.result.exponent.eq(0),
                self.result.sign.eq(0),
            ]
        with m.Else():
            m.d.comb += [
                self.result.mantissa.eq(rounder.fraction_out),
                self.result.exponent.eq(shifted_exp + rounder.carry),
                self.result.sign.eq(self.sign),
            ]

        return m
