from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class Aligner(wiring.Component):
    """Right shift with sticky: bits shifted out are ORed into bit 0

    Shift amounts at or beyond the width leave only the sticky bit.
    """

    def __init__(self, width: int = 27):
        self.width = width

        super().__init__(
            {
                "value_in": In(width),
                "shift_amount": In(8),
                "value_out": Out(width),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        with m.Switch(self.shift_amount):
            with m.Case(0):
                m.d.comb += self.value_out.eq(self.value_in)
            for s in range(1, self.width):
                with m.Case(s):
                    m.d.comb += self.value_out.eq((self.value_in >> s) | self.value_in[0:s].any())
            with m.Default():
                m.d.comb += self.value_out.eq(self.value_in.any())

        return m
