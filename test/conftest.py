import argparse

import numpy as np
import pytest
from amaranth.sim import Simulator


def pytest_addoption(parser):
    parser.addoption(
        "--vcd",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="whether to produce vcd files",
    )


@pytest.fixture
def simulate(request):
    """Run a testbench against a DUT, writing a VCD when --vcd is given"""

    def run(dut, bench):
        sim = Simulator(dut)
        sim.add_testbench(bench)

        if request.config.getoption("--vcd"):
            vcd_name = f"{dut.__class__.__name__}_{request.node.name}.vcd"
            with sim.write_vcd(vcd_name):
                sim.run()
        else:
            sim.run()

    return run


@pytest.fixture
def rng():
    return np.random.default_rng(450)


@pytest.fixture
def random_normals(rng):
    """Random normalized float32 values with exponents in [-exp_range, exp_range]"""

    def generate(count: int, exp_range: int = 20) -> list[np.float32]:
        signs = rng.integers(0, 2, count)
        exps = rng.integers(127 - exp_range, 127 + exp_range + 1, count)
        mants = rng.integers(0, 1 << 23, count)
        bits = (signs.astype(np.uint32) << 31) | (exps.astype(np.uint32) << 23) | mants.astype(np.uint32)
        return list(bits.astype(np.uint32).view(np.float32))

    return generate
