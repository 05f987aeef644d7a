from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from aligner import Aligner
from fp32 import Float32
from normalizer import Normalizer


class FP32Adder(wiring.Component):
    """FP32 adder: result = a + b, round to nearest even

    Significands carry 3 extra low bits (guard, round, sticky). The operand
    with the smaller exponent is aligned with sticky collection, both are
    signed, summed, and the magnitude is normalized and rounded. A zero
    operand passes the other operand through unchanged.
    """

    a: In(Float32)
    b: In(Float32)
    result: Out(Float32)

    # working exponent - 3, modulo 256
    EXP_OFFSET = 256 - 3

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.aligner = aligner = Aligner(width=27)
        m.submodules.normalizer = normalizer = Normalizer(width=28)

        a_exp = self.a.exponent
        b_exp = self.b.exponent

        # ---- Extend with GRS ----
        a_ext = Signal(27)
        b_ext = Signal(27)
        m.d.comb += a_ext.eq(Cat(Const(0, 3), self.a.mantissa, Const(1, 1)))
        m.d.comb += b_ext.eq(Cat(Const(0, 3), self.b.mantissa, Const(1, 1)))

        # ---- Align ----
        a_larger = Signal()
        m.d.comb += a_larger.eq(a_exp >= b_exp)

        working_exp = Signal(8)
        a_aligned = Signal(27)
        b_aligned = Signal(27)

        with m.If(a_larger):
            m.d.comb += [
                working_exp.eq(a_exp),
                aligner.value_in.eq(b_ext),
                aligner.shift_amount.eq(a_exp - b_exp),
                a_aligned.eq(a_ext),
                b_aligned.eq(aligner.value_out),
            ]
        with m.Else():
            m.d.comb += [
                working_exp.eq(b_exp),
                aligner.value_in.eq(a_ext),
                aligner.shift_amount.eq(b_exp - a_exp),
                a_aligned.eq(aligner.value_out),
                b_aligned.eq(b_ext),
            ]

        # ---- Signed Sum ----
        a_signed = Signal(signed(28))
        b_signed = Signal(signed(28))
        m.d.comb += a_signed.eq(Mux(self.a.sign, -a_aligned, a_aligned))
        m.d.comb += b_signed.eq(Mux(self.b.sign, -b_aligned, b_aligned))

        total = Signal(signed(29))
        m.d.comb += total.eq(a_signed + b_signed)

        magnitude = Signal(28)
        negative = Signal()
        m.d.comb += negative.eq(total < 0)
        m.d.comb += magnitude.eq(Mux(negative, -total, total))

        # ---- Normalize and Round ----
        m.d.comb += [
            normalizer.value.eq(magnitude),
            normalizer.exponent.eq(working_exp + self.EXP_OFFSET),
            normalizer.sign.eq(negative),
        ]

        # ---- Pack Result ----
        with m.If(self.b.is_zero()):
            m.d.comb += self.result.eq(self.a)
        with m.Elif(self.a.is_zero()):
            m.d.comb += self.result.eq(self.b)
        with m.Else():
            m.d.comb += self.result.eq(normalizer.result)

        return m
