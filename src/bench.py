"""Time the integration example with native float32 and with the software model."""

import argparse
import logging
import time

import numpy as np

from fp32 import as_float_value
from integrate import approximate_integral

logger = logging.getLogger(__name__)


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def timed(label: str, number, start: float, end: float, steps: int):
    logger.debug("integrating x over [%s, %s] in %d steps with %s", start, end, steps, label)
    t0 = time.perf_counter()
    result = approximate_integral(start, end, steps, number=number)
    elapsed_us = (time.perf_counter() - t0) * 1e6
    logger.debug("%s finished in %.0f us", label, elapsed_us)
    return float(result), elapsed_us


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--start", type=float, default=0.0)
    parser.add_argument("--end", type=float, default=10.0)
    parser.add_argument("--steps", type=positive_int, default=100_000)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    native, native_us = timed("float32", np.float32, args.start, args.end, args.steps)
    emulated, emulated_us = timed("FloatValue", as_float_value, args.start, args.end, args.steps)

    print(f"Total execution time float32:    {native_us:.0f} microseconds")
    print(f"Total execution time FloatValue: {emulated_us:.0f} microseconds")
    print(f"{native:f}")
    print(f"{emulated:f}")

    if native != emulated:
        logger.warning("results differ: float32=%r FloatValue=%r", native, emulated)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
