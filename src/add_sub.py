from fp32 import BIAS, FRACTION_BITS, GRS_BITS, FloatValue
from rounding import normalize


def align(significand: int, shift: int) -> int:
    """Shift right by `shift` bits, keeping a sticky record in bit 0.

    Bit 0 is the sticky position: it ends up set if it or any bit shifted
    out below it was set.
    """
    sticky = 0
    for _ in range(shift):
        sticky |= significand & 1
        significand >>= 1
    return significand | sticky


def add(a: FloatValue, b: FloatValue) -> FloatValue:
    if b.is_zero():
        return a
    if a.is_zero():
        return b

    # ---- Extend with guard, round and sticky ----
    a_mant = a.full_significand() << GRS_BITS
    b_mant = b.full_significand() << GRS_BITS

    # ---- Align to the larger exponent ----
    if a.exponent < b.exponent:
        a_mant = align(a_mant, b.exponent - a.exponent)
        working_exponent = b.exponent
    else:
        b_mant = align(b_mant, a.exponent - b.exponent)
        working_exponent = a.exponent

    # ---- Signed sum ----
    if a.sign:
        a_mant = -a_mant
    if b.sign:
        b_mant = -b_mant
    total = a_mant + b_mant

    # NOTE: normalize() starts from BIAS + FRACTION_BITS; drop the GRS bits
    # and rebase onto the working exponent.
    exponent = (BIAS + FRACTION_BITS) - GRS_BITS + (working_exponent - BIAS - FRACTION_BITS)
    return normalize(total, exponent)


def sub(a: FloatValue, b: FloatValue) -> FloatValue:
    return add(a, b.negate())
