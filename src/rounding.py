"""Normalization and round-to-nearest-even for the software FP32 model.

Every arithmetic result goes through normalize(), which is the only place
precision is dropped. The caller positions the binary point through the
provisional exponent: a magnitude whose leading one sits at bit 23 gets
exactly that exponent.
"""

from fp32 import BIAS, EXPONENT_MASK, FRACTION_BITS, FRACTION_MASK, FloatValue

MANTISSA_LIMIT = 1 << (FRACTION_BITS + 1)  # 2^24
HIDDEN_LIMIT = 1 << FRACTION_BITS  # 2^23


def round_nearest_even(mantissa: int, gr: int, sticky: int) -> tuple[int, int]:
    """Round a 24-bit mantissa given its guard/round pair and sticky bit.

    gr holds the guard bit in bit 1 and the round bit in bit 0. Returns the
    rounded mantissa and a carry flag, set when rounding reached bit 24.
    """
    if gr == 2:
        if sticky:
            mantissa += 1
        else:
            # tie: only an odd mantissa moves
            mantissa = (mantissa + 1) & ~1
    elif gr == 3:
        mantissa += 1

    carry = 1 if mantissa >= MANTISSA_LIMIT else 0
    return mantissa, carry


def normalize(value: int, exponent: int = BIAS + FRACTION_BITS, sign: int = 0) -> FloatValue:
    """Build a normalized, rounded FloatValue from a signed integer.

    The result represents value * 2^(exponent - BIAS - FRACTION_BITS), with
    the sign flipped when `sign` is set. The exponent field is not range
    checked; it wraps modulo 256.
    """
    if value == 0:
        return FloatValue.zero()

    if value < 0:
        sign ^= 1
        value = -value

    gr = 0
    sticky = 0
    while value >= MANTISSA_LIMIT:
        exponent += 1
        sticky |= gr & 1
        gr = (gr >> 1) | ((value & 1) << 1)
        value >>= 1

    while value < HIDDEN_LIMIT:
        exponent -= 1
        value <<= 1

    value, carry = round_nearest_even(value, gr, sticky)
    if carry:
        exponent += 1
        value >>= 1

    return FloatValue(sign, exponent & EXPONENT_MASK, value & FRACTION_MASK)
