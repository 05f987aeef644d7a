from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from fp32 import Float32
from mantissa_multiplier import MantissaMultiplier
from normalizer import Normalizer


class FP32Multiplier(wiring.Component):
    """FP32 multiplier: result = a * b, round to nearest even

    Exponent over/underflow wraps modulo 256; subnormals, infinities and NaN
    are not recognised.
    """

    a: In(Float32)
    b: In(Float32)
    result: Out(Float32)

    # (ea - 127) + (eb - 127) + 127 - 3, modulo 256
    EXP_OFFSET = (127 - 3 - 2 * 127) % 256

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.mant_mul = mant_mul = MantissaMultiplier()
        m.submodules.normalizer = normalizer = Normalizer(width=28)

        # ---- Result Sign ----
        result_sign = Signal()
        m.d.comb += result_sign.eq(self.a.sign ^ self.b.sign)

        # ---- Mantissa Multiply ----
        m.d.comb += mant_mul.a_mant.eq(self.a.mantissa)
        m.d.comb += mant_mul.b_mant.eq(self.b.mantissa)

        # ---- Exponent Addition ----
        exp_sum = Signal(8)
        m.d.comb += exp_sum.eq(self.a.exponent + self.b.exponent + self.EXP_OFFSET)

        # ---- Normalize and Round ----
        m.d.comb += [
            normalizer.value.eq(mant_mul.framed),
            normalizer.exponent.eq(exp_sum),
            normalizer.sign.eq(result_sign),
        ]

        # ---- Pack Result ----
        with m.If(self.a.is_zero() | self.b.is_zero()):
            m.d.comb += [
                self.result.mantissa.eq(0),
                self.result.exponent.eq(0),
                self.result.sign.eq(result_sign),
            ]
        with m.Else():
            m.d.comb += self.result.eq(normalizer.result)

        return m
