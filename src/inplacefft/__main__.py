import argparse
import logging
import random

from .complex import ComplexNumber
from .fft import is_power_of_two, transform


def build_parser():
    parser = argparse.ArgumentParser(
        prog="inplacefft",
        description="Print a sample sequence and its in-place FFT.",
    )
    parser.add_argument("n", type=int, help="Sequence length, a power of two")
    parser.add_argument(
        "--random",
        action="store_true",
        help="Use uniform real samples in [-1, 1) instead of 0, 1, ..., n-1",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument(
        "--backend",
        choices=("list", "torch"),
        default="list",
        help="Transform a ComplexNumber list or a (2, n) torch tensor",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def sample_sequence(n, use_random=False, seed=None):
    if use_random:
        rng = random.Random(seed)
        return [ComplexNumber(-2 * rng.random() + 1, 0) for _ in range(n)]
    return [ComplexNumber(i, 0) for i in range(n)]


def run_backend(x, backend):
    if backend == "torch":
        from .fftcore import FFTCore, from_tensor, to_tensor

        return from_tensor(FFTCore(len(x))(to_tensor(x)))
    return transform(x)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not is_power_of_two(args.n):
        parser.error(f"n is not a power of 2: {args.n}")

    x = sample_sequence(args.n, args.random, args.seed)
    for c in x:
        print(c)
    print()

    for c in run_backend(x, args.backend):
        print(c)
    print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
