import normalizer
from fp32 import FloatValue
from rounding import normalize


def read_result(ctx, dut) -> FloatValue:
    return FloatValue.pack(
        ctx.get(dut.result.sign),
        ctx.get(dut.result.exponent),
        ctx.get(dut.result.mantissa),
    )


def test_normalizer_shift_paths(simulate):
    """One value per leading-one position, left and right shifts"""
    dut = normalizer.Normalizer(width=28)

    test_cases = [
        # (value, exponent, sign)
        (0, 150, 0),
        (1, 150, 0),
        (0b1011, 140, 1),
        (0x7FFFFF, 150, 0),
        (0x800000, 150, 0),  # already normalized
        (0xFFFFFF, 150, 1),
        (0x1000001, 150, 0),  # 25 bits: guard only
        (0x1FFFFFF, 150, 0),  # 25 bits: tie rounds up and carries
        (0x2000002, 150, 0),  # 26 bits: exact tie, even
        (0x2000006, 150, 0),  # 26 bits: exact tie, odd
        (0x4000005, 150, 0),  # 27 bits: sticky breaks the tie
        (0x8000004, 150, 0),  # 28 bits
        (0xFFFFFFF, 150, 1),
    ]

    async def bench(ctx):
        for value, exponent, sign in test_cases:
            ctx.set(dut.value, value)
            ctx.set(dut.exponent, exponent)
            ctx.set(dut.sign, sign)

            result = read_result(ctx, dut)
            expected = normalize(value, exponent, sign)
            assert result == expected, f"value=0x{value:07X} exp={exponent}: got {result}, expected {expected}"

    simulate(dut, bench)


def test_normalizer_matches_software(simulate, rng):
    dut = normalizer.Normalizer(width=28)

    widths = rng.integers(1, 29, 300)
    test_cases = [
        (int(rng.integers(1 << (w - 1), 1 << w)), int(rng.integers(0, 256)), int(rng.integers(0, 2))) for w in widths
    ]

    async def bench(ctx):
        for value, exponent, sign in test_cases:
            ctx.set(dut.value, value)
            ctx.set(dut.exponent, exponent)
            ctx.set(dut.sign, sign)

            result = read_result(ctx, dut)
            expected = normalize(value, exponent, sign)
            assert result.to_bits() == expected.to_bits(), (
                f"value=0x{value:07X} exp={exponent} sign={sign}: "
                f"got 0x{result.to_bits():08X}, expected 0x{expected.to_bits():08X}"
            )

    simulate(dut, bench)
