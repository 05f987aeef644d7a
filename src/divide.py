from fp32 import BIAS, GRS_BITS, FloatValue
from rounding import normalize

QUOTIENT_BITS = 26  # integer bit + 23 fraction + guard + round


def divide_significands(numerator: int, denominator: int) -> int:
    """Restoring long division of two 24-bit significands.

    Produces 26 quotient bits, the first being the integer bit, then appends
    a sticky bit that is set when a remainder is left over.
    """
    quotient = 0
    for _ in range(QUOTIENT_BITS):
        quotient <<= 1
        if numerator >= denominator:
            numerator -= denominator
            quotient |= 1
        numerator <<= 1

    quotient <<= 1
    if numerator:
        quotient |= 1
    return quotient


def div(a: FloatValue, b: FloatValue) -> FloatValue:
    """A zero numerator short-circuits to zero with the quotient sign; a zero
    divisor is not checked."""
    sign = a.sign ^ b.sign
    if a.is_zero():
        return FloatValue(sign, 0, 0)

    quotient = divide_significands(a.full_significand(), b.full_significand())

    exponent = BIAS - GRS_BITS + (a.exponent - BIAS) - (b.exponent - BIAS)
    return normalize(quotient, exponent, sign)
