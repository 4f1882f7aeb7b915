"""
Integer factorization through the classical skeleton of Shor's algorithm.

The quantum part of Shor's algorithm (order finding with the quantum Fourier
transform) is replaced by a brute-force sequential scan. Everything else
follows the textbook reduction:

1. Pick a random base a with 1 < a < n
2. gcd(a, n) > 1 already gives a factor
3. Find the period r of a^x mod n
4. Reject odd r and a^(r/2) = -1 (mod n)
5. gcd(a^(r/2) - 1, n) or gcd(a^(r/2) + 1, n) is a nontrivial factor

OPTIMIZATIONS:
1. Numba JIT period scan for moduli below 2^31 (int64-safe)
   - Pure Python loop beyond that, so arbitrary precision still works
2. Memoization: LRU caches for is_prime() and find_period()
   - Re-sampled bases reuse their period instead of rescanning

LIMITS:
- Period search is O(r) multiplications, exponential in the size of n
- Retries are bounded by max_attempts / timeout (None restores the
  unbounded reference loop)
"""
import enum
import logging
import math
import random
import time
from dataclasses import dataclass
from functools import lru_cache

from jit_operations import (
    _period_scan_jit,
    fits_jit,
    is_minimal_period_jit,
)

logger = logging.getLogger(__name__)

# Upper bound on sampled bases per shor_factor() call
DEFAULT_MAX_ATTEMPTS: int = 10_000

# Miller-Rabin witnesses, deterministic for n < 2^64
_PRIME_BASES: tuple[int, ...] = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)


class FactorStatus(enum.Enum):
    """Outcome of a shor_factor() run."""
    FOUND = "found"
    INVALID_INPUT = "invalid_input"
    PRIME = "prime"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class FactorResult:
    """Result of shor_factor(): a complete factor pair or a failure reason."""
    n: int
    status: FactorStatus
    factors: tuple[int, int] | None = None
    attempts: int = 0
    method: str | None = None
    base: int | None = None
    period: int | None = None

    @property
    def found(self) -> bool:
        return self.status is FactorStatus.FOUND


def clear_caches():
    """Clear all memoization caches. Useful between independent factorization runs."""
    is_prime.cache_clear()
    _find_period_cached.cache_clear()


# ============================================================================
# MODULAR ARITHMETIC PRIMITIVES
# ============================================================================

def gcd(a: int, b: int) -> int:
    """Euclidean greatest common divisor; gcd(0, 0) == 0."""
    return math.gcd(a, b)


def modpow(base: int, exponent: int, modulus: int) -> int:
    """
    Compute base^exponent mod modulus by repeated squaring.

    Args:
        base: Non-negative base
        exponent: Non-negative exponent
        modulus: Modulus >= 1

    Returns:
        Value in [0, modulus)

    Raises:
        ZeroDivisionError: modulus is 0
        ValueError: negative modulus or exponent
    """
    if modulus == 0:
        raise ZeroDivisionError("modpow() modulus must be nonzero")
    if modulus < 0:
        raise ValueError(f"modpow() modulus must be positive, got {modulus}")
    if exponent < 0:
        raise ValueError(f"modpow() exponent must be non-negative, got {exponent}")

    result: int = 1 % modulus
    base %= modulus
    while exponent:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


# Miller–Rabin primality test (memoized)
@lru_cache(maxsize=128)
def is_prime(n: int, bases: tuple[int, ...] = _PRIME_BASES) -> bool:
    if n < 2:
        return False
    # small primes check
    for p in (2, 3, 5, 7, 11, 13, 17, 19, 23):
        if n == p:
            return True
        if n % p == 0:
            return False

    # write n-1 as d * 2^s
    d: int = n - 1
    s: int = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1

    def check(a):
        x: int = modpow(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = (x * x) % n
            if x == n - 1:
                return True
        return False

    for a in bases:
        if a % n == 0:
            continue
        if not check(a):
            return False
    return True


# ============================================================================
# PERIOD FINDER
# ============================================================================

def _period_scan(a: int, n: int, limit: int) -> int | None:
    """Arbitrary-precision version of the sequential order search."""
    x: int = a % n
    r: int = 1
    while x != 1:
        x = (x * a) % n
        r += 1
        if r > limit:
            return None
    return r


@lru_cache(maxsize=1024)
def _find_period_cached(a: int, n: int, limit: int) -> int | None:
    """Cached period search (a base may be sampled many times)."""
    if fits_jit(n):
        # the order never exceeds n, so clamping keeps the ceiling in int64
        r = int(_period_scan_jit(a % n, n, min(limit, n * n)))
        return r if r else None
    return _period_scan(a, n, limit)


def find_period(a: int, n: int, limit: int | None = None) -> int | None:
    """
    Find the smallest r > 0 with a^r = 1 (mod n) by sequential multiplication.

    This is the step a quantum computer would speed up; here it is an O(r)
    scan. Moduli below JIT_MODULUS_LIMIT run in a compiled kernel.

    Args:
        a: Base, must be coprime to n
        n: Modulus > 1
        limit: Ceiling on r (default n * n)

    Returns:
        The period, or None when a and n share a factor or the ceiling is hit
    """
    if gcd(a, n) != 1:
        return None
    if limit is None:
        limit = n * n

    r = _find_period_cached(a, n, limit)
    if r is None:
        logger.warning("Period finding exceeded limit %d for a = %d", limit, a)
    return r


def verify_period(a: int, n: int, r: int) -> bool:
    """Check that r is the multiplicative order of a modulo n."""
    # the order of a unit modulo n is at most n - 1
    if r < 1 or n < 2 or r >= n:
        return False
    if fits_jit(n):
        return is_minimal_period_jit(a, n, r)

    x: int = 1
    for k in range(1, r + 1):
        x = (x * a) % n
        if x == 1:
            return k == r
    return False


# ============================================================================
# FACTOR EXTRACTOR
# ============================================================================

def _nontrivial(candidate: int, n: int) -> bool:
    return 1 < candidate < n


def shor_factor(
    n: int,
    rng=None,
    max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
    timeout: float | None = None,
    check_prime: bool = False,
    period_limit: int | None = None,
) -> FactorResult:
    """
    Split n into two nontrivial factors with the classical Shor loop.

    Args:
        n: Integer to factor (expected composite and > 3)
        rng: Random source with a randrange() method (default: the random module)
        max_attempts: Bases to try before giving up (None for unbounded)
        timeout: Wall-clock budget in seconds, checked between attempts
        check_prime: Run Miller-Rabin first and report PRIME instead of looping
        period_limit: Ceiling passed to find_period() (default n * n)

    Returns:
        FactorResult with status FOUND and factors (p, q), p * q == n, or a
        failure status (INVALID_INPUT, PRIME, EXHAUSTED) and no factors
    """
    if max_attempts is not None and max_attempts < 1:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")
    if timeout is not None and timeout < 0:
        raise ValueError(f"timeout must be non-negative, got {timeout}")

    if n <= 1:
        logger.error("Number must be greater than 1, got %d", n)
        return FactorResult(n, FactorStatus.INVALID_INPUT)
    if n in (2, 3):
        return FactorResult(n, FactorStatus.PRIME)
    if (n & 1) == 0:
        return FactorResult(n, FactorStatus.FOUND, (2, n >> 1), method="even")
    if check_prime and is_prime(n):
        logger.info("%d is prime, nothing to factor", n)
        return FactorResult(n, FactorStatus.PRIME)

    if rng is None:
        rng = random
    deadline = None if timeout is None else time.monotonic() + timeout
    attempts = 0

    while True:
        if max_attempts is not None and attempts >= max_attempts:
            logger.info("Gave up on %d after %d attempts", n, attempts)
            return FactorResult(n, FactorStatus.EXHAUSTED, attempts=attempts)
        if deadline is not None and time.monotonic() >= deadline:
            logger.info("Gave up on %d after %.3fs (%d attempts)", n, timeout, attempts)
            return FactorResult(n, FactorStatus.EXHAUSTED, attempts=attempts)

        a: int = rng.randrange(2, n)
        attempts += 1
        logger.debug("Trying a = %d", a)

        g = gcd(a, n)
        if g > 1:
            logger.info("Found factor (GCD): %d", g)
            return FactorResult(n, FactorStatus.FOUND, (g, n // g),
                                attempts=attempts, method="gcd", base=a)

        r = find_period(a, n, period_limit)
        if r is None:
            logger.debug("Could not find period for a = %d, trying another base", a)
            continue
        logger.debug("Found period r = %d", r)

        if r & 1:
            logger.debug("Period r = %d is odd, trying another base", r)
            continue

        term: int = modpow(a, r >> 1, n)
        if term == n - 1:
            logger.debug("a^(r/2) = -1 (mod n), trying another base")
            continue

        # term - 1 wraps to n - 1 when term is 0
        for candidate in (gcd((term - 1) % n, n), gcd(term + 1, n)):
            if _nontrivial(candidate, n):
                logger.info("Found factor (period): %d", candidate)
                return FactorResult(n, FactorStatus.FOUND, (candidate, n // candidate),
                                    attempts=attempts, method="period", base=a, period=r)

        logger.debug("Found trivial factors, trying another base")


def factor(n: int, rng=None, **options) -> tuple[int, int] | None:
    """
    Find one nontrivial factor pair of n.

    Keyword options are passed to shor_factor().

    Returns:
        (p, q) with p * q == n, or None when no pair was found
    """
    return shor_factor(n, rng=rng, **options).factors
