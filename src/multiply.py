from fp32 import BIAS, GRS_BITS, FloatValue
from rounding import normalize

SIGNIFICAND_WIDTH = 24
STICKY_SPAN = 20  # product bits folded into the sticky bit


def multiply_significands(a: int, b: int) -> int:
    """Exact unsigned 24x24 product by shift-and-add (up to 48 bits)."""
    product = 0
    for _ in range(SIGNIFICAND_WIDTH):
        if a & 1:
            product += b
        b <<= 1
        a >>= 1
    return product


def frame_product(product: int) -> int:
    """Drop the low 20 product bits, keeping them as a sticky bit.

    Result layout: bit 0 sticky, bits 1-2 guard/round, bits 3-25 fraction,
    bits 26-27 integer part.
    """
    sticky = 1 if product & ((1 << STICKY_SPAN) - 1) else 0
    return (product >> STICKY_SPAN) | sticky


def mul(a: FloatValue, b: FloatValue) -> FloatValue:
    """A zero operand short-circuits to zero with the product sign instead of
    getting an implied leading one."""
    sign = a.sign ^ b.sign
    if a.is_zero() or b.is_zero():
        return FloatValue(sign, 0, 0)

    product = multiply_significands(a.full_significand(), b.full_significand())

    # binary point of the framed product sits at bit 26 (GRS + fraction)
    exponent = BIAS - GRS_BITS + (a.exponent - BIAS) + (b.exponent - BIAS)
    return normalize(frame_product(product), exponent, sign)
