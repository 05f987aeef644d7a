import aligner
from add_sub import align


def test_aligner_no_shift(simulate):
    dut = aligner.Aligner(width=27)

    test_cases = [
        0b000000000000000000000000000,
        0b111111111111111111111111111,
        0b101010101010101010101010101,
        0b100000000000000000000000001,
    ]

    async def bench(ctx):
        for value in test_cases:
            ctx.set(dut.value_in, value)
            ctx.set(dut.shift_amount, 0)

            result = ctx.get(dut.value_out)
            assert result == value, f"No shift: input=0b{value:027b}, got=0b{result:027b}"

    simulate(dut, bench)


def test_aligner_sticky(simulate):
    dut = aligner.Aligner(width=27)

    test_cases = [
        # (input, shift_amount, expected_output)
        (0b100000000000000000000000000, 3, 0b000100000000000000000000000),
        (0b100000000000000000000001000, 3, 0b000100000000000000000000001),  # lands on sticky
        (0b100000000000000000000000100, 3, 0b000100000000000000000000001),  # shifted out
        (0b100000000000000000000000000, 26, 0b000000000000000000000000001),
        (0b100000000000000000000000000, 27, 0b000000000000000000000000001),  # all bits gone
        (0b100000000000000000000000000, 200, 0b000000000000000000000000001),
        (0b000000000000000000000000000, 200, 0b000000000000000000000000000),
    ]

    async def bench(ctx):
        for value, shift, expected in test_cases:
            ctx.set(dut.value_in, value)
            ctx.set(dut.shift_amount, shift)

            result = ctx.get(dut.value_out)
            assert result == expected, (
                f"shift={shift}: input=0b{value:027b}, got=0b{result:027b}, expected=0b{expected:027b}"
            )

    simulate(dut, bench)


def test_aligner_matches_software(simulate, rng):
    dut = aligner.Aligner(width=27)

    values = [int(v) << 3 for v in rng.integers(1 << 23, 1 << 24, 200)]
    shifts = [int(s) for s in rng.integers(0, 40, 200)]

    async def bench(ctx):
        for value, shift in zip(values, shifts):
            ctx.set(dut.value_in, value)
            ctx.set(dut.shift_amount, shift)

            result = ctx.get(dut.value_out)
            expected = align(value, shift)
            assert result == expected, f"shift={shift}: input=0x{value:07X}, got=0x{result:07X}, expected=0x{expected:07X}"

    simulate(dut, bench)
