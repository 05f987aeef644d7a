import functools
import struct
from dataclasses import dataclass
from types import SimpleNamespace

import numpy as np
from amaranth.lib import data

BIAS = 127
FRACTION_BITS = 23
GRS_BITS = 3  # guard, round, sticky

EXPONENT_MASK = 0xFF
FRACTION_MASK = 0x7FFFFF
HIDDEN_BIT = 1 << FRACTION_BITS


class Float32(data.Struct):
    """IEEE 754 single precision layout: 1 sign + 8 exponent + 23 mantissa"""

    mantissa: 23
    exponent: 8
    sign: 1

    def is_zero(self):
        return self.exponent == 0


@dataclass(frozen=True)
class FloatValue:
    """Software single precision value with explicit sign/exponent/significand.

    An exponent of 0 always means zero; the significand bits are ignored in
    that case. Subnormals, infinities and NaN are not interpreted: their bit
    patterns are accepted by from_bits/from_float but the arithmetic treats
    every nonzero exponent as carrying an implied leading one.
    """

    sign: int
    exponent: int
    significand: int

    @classmethod
    def zero(cls):
        return cls(0, 0, 0)

    @classmethod
    def from_bits(cls, bits: int):
        sign = (bits >> 31) & 0x1
        exp = (bits >> FRACTION_BITS) & EXPONENT_MASK
        mant = bits & FRACTION_MASK
        return cls(sign, exp, mant)

    @classmethod
    def from_float(cls, f):
        # out-of-range doubles narrow to +/-inf like a native float cast
        with np.errstate(over="ignore"):
            narrowed = np.float32(f)
        fp32_bits = struct.unpack(">I", struct.pack(">f", narrowed))[0]
        return cls.from_bits(fp32_bits)

    @classmethod
    def from_int(cls, i: int):
        return _engines().normalize(i)

    @classmethod
    def pack(cls, sign: int, exp: int, mant: int):
        return cls(sign, exp, mant)

    def unpack(self) -> tuple[int, int, int]:
        return self.sign, self.exponent, self.significand

    def to_bits(self) -> int:
        sign = self.sign & 0x1
        exp = self.exponent & EXPONENT_MASK
        mant = self.significand & FRACTION_MASK
        return (sign << 31) | (exp << FRACTION_BITS) | mant

    def to_float(self) -> float:
        return struct.unpack(">f", struct.pack(">I", self.to_bits()))[0]

    def to_int(self) -> int:
        # Truncates toward zero like a C (int) cast; out-of-range magnitudes
        # give whatever the native float32 -> int32 conversion gives.
        with np.errstate(invalid="ignore"):
            return int(np.float32(self.to_float()).astype(np.int32))

    def is_zero(self) -> bool:
        return self.exponent == 0

    def full_significand(self) -> int:
        """Significand with the implied leading one (24 bits)."""
        return self.significand + HIDDEN_BIT

    def negate(self):
        return FloatValue(self.sign ^ 1, self.exponent, self.significand)

    def __neg__(self):
        return self.negate()

    def __add__(self, other):
        return _engines().add(self, as_float_value(other))

    def __radd__(self, other):
        return _engines().add(as_float_value(other), self)

    def __sub__(self, other):
        return _engines().sub(self, as_float_value(other))

    def __rsub__(self, other):
        return _engines().sub(as_float_value(other), self)

    def __mul__(self, other):
        return _engines().mul(self, as_float_value(other))

    def __rmul__(self, other):
        return _engines().mul(as_float_value(other), self)

    def __truediv__(self, other):
        return _engines().div(self, as_float_value(other))

    def __rtruediv__(self, other):
        return _engines().div(as_float_value(other), self)

    def __float__(self):
        return self.to_float()

    def __int__(self):
        return self.to_int()

    def __str__(self):
        return str(self.to_float())


def as_float_value(value) -> FloatValue:
    if isinstance(value, FloatValue):
        return value
    if isinstance(value, (int, np.integer)):
        return FloatValue.from_int(int(value))
    return FloatValue.from_float(value)


@functools.cache
def _engines() -> SimpleNamespace:
    # the engine modules import FloatValue from here, so they load on first use
    import add_sub
    import divide
    import multiply
    import rounding

    return SimpleNamespace(
        normalize=rounding.normalize,
        add=add_sub.add,
        sub=add_sub.sub,
        mul=multiply.mul,
        div=divide.div,
    )
