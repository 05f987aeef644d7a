from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from fp32 import Float32
from mantissa_divider import MantissaDivider
from normalizer import Normalizer


class FP32Divider(wiring.Component):
    """FP32 divider: result = a / b, round to nearest even

    A zero divisor is not detected: its mantissa is divided as 1.0.
    """

    a: In(Float32)
    b: In(Float32)
    result: Out(Float32)

    # (ea - 127) - (eb - 127) + 127 - 3, modulo 256
    EXP_OFFSET = 127 - 3

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.mant_div = mant_div = MantissaDivider()
        m.submodules.normalizer = normalizer = Normalizer(width=27)

        result_sign = Signal()
        m.d.comb += result_sign.eq(self.a.sign ^ self.b.sign)

        m.d.comb += mant_div.a_mant.eq(self.a.mantissa)
        m.d.comb += mant_div.b_mant.eq(self.b.mantissa)

        # ---- Exponent Difference ----
        # NOTE: ~eb + 1 == 256 - eb, which is -eb modulo 256
        exp_diff = Signal(8)
        m.d.comb += exp_diff.eq(self.a.exponent + ~self.b.exponent + self.EXP_OFFSET + 1)

        m.d.comb += [
            normalizer.value.eq(mant_div.quotient),
            normalizer.exponent.eq(exp_diff),
            normalizer.sign.eq(result_sign),
        ]

        with m.If(self.a.is_zero()):
            m.d.comb += [
                self.result.mantissa.eq(0),
                self.result.exponent.eq(0),
                self.result.sign.eq(result_sign),
            ]
        with m.Else():
            m.d.comb += self.result.eq(normalizer.result)

        return m
