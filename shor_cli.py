"""
Command-line driver for the classical Shor simulator.

Reads one decimal integer (argument or prompt), factors it once and reports
the pair, a verification product and the elapsed time.
"""
import argparse
import logging
import random
import sys
import time

from classical_shor import DEFAULT_MAX_ATTEMPTS, FactorStatus, shor_factor

_FAILURE_MESSAGES = {
    FactorStatus.INVALID_INPUT: "Number must be greater than 1.",
    FactorStatus.PRIME: "The number is prime, there are no nontrivial factors.",
    FactorStatus.EXHAUSTED: ("The number might be prime or the algorithm failed "
                             "(attempt or time budget spent)."),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classical-shor",
        description="Factor N with Shor's algorithm, using brute-force classical period finding.",
    )
    parser.add_argument("N", nargs="?", help="Number to factor (decimal). Prompted for when omitted.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible base choices.")
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS,
                        help=f"Bases to try before giving up, 0 for no limit (default: {DEFAULT_MAX_ATTEMPTS}).")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Wall-clock budget in seconds, checked between attempts.")
    parser.add_argument("--check-prime", action="store_true",
                        help="Run a Miller-Rabin test first and stop if N is prime.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Show progress (-v) or every attempt (-vv).")
    return parser


def _log_level(verbosity: int) -> int:
    """WARNING by default, INFO with -v, DEBUG with -vv."""
    if verbosity > 1:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def _configure_logging(verbosity: int):
    level = _log_level(verbosity)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("classical_shor").setLevel(level)


def _read_number(raw: str | None) -> str:
    if raw is None:
        print("Enter the number (N) to factor:")
        raw = sys.stdin.readline()
    return raw.strip()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_attempts < 0:
        parser.error("--max-attempts must not be negative")
    if args.timeout is not None and args.timeout < 0:
        parser.error("--timeout must not be negative")
    _configure_logging(args.verbose)

    digits = _read_number(args.N)
    # plain decimal digits only: no sign, no underscores, no whitespace
    if not (digits.isascii() and digits.isdigit()):
        print("Invalid number input.")
        return 2
    try:
        n = int(digits, 10)
    except ValueError:
        # str -> int conversion is capped by sys.set_int_max_str_digits()
        print(f"Number is too long: {len(digits)} digits, the interpreter limit "
              f"is {sys.get_int_max_str_digits()}.")
        return 2
    if n < 4:
        print("Please enter a composite number greater than 3.")
        return 2

    print(f"Attempting to factor N = {n}")
    rng = random.Random(args.seed)

    start = time.perf_counter()
    result = shor_factor(
        n,
        rng=rng,
        max_attempts=args.max_attempts or None,
        timeout=args.timeout,
        check_prime=args.check_prime,
    )
    elapsed = time.perf_counter() - start

    if result.found:
        p, q = result.factors
        print(f"\nFactors found: {p} and {q}")
        print(f"Verification: {p} * {q} = {p * q}")
    else:
        print(f"\nFailed to find factors. {_FAILURE_MESSAGES[result.status]}")
    print(f"Computation took: {elapsed:.6f}s")
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
