"""
JIT kernels for the classical Shor simulator.

This module contains Numba-compiled loops for the word-sized fast path of the
period search. Every kernel works on int64 values, so callers must only route
moduli below JIT_MODULUS_LIMIT here; anything larger stays on the pure Python
(arbitrary precision) path in classical_shor.

OPTIMIZATION TARGETS:
1. Period Scan: Numba JIT (removes interpreter overhead from the x*a mod n loop)
2. Power Table: Numba JIT + NumPy array (vectorized minimality check)
"""

import numpy as np
from typing import List

from numba import njit

# x < n and a < n, so x * a < n**2 <= 2**62 stays inside int64.
# The default ceiling n * n also fits for the same reason.
JIT_MODULUS_LIMIT: int = 2**31


def fits_jit(n: int) -> bool:
    """Check whether modulus n can use the int64 kernels."""
    return 1 < n < JIT_MODULUS_LIMIT


# ============================================================================
# PART 1: PERIOD SCAN (Numba JIT)
# ============================================================================

@njit
def _period_scan_jit(a: int, n: int, limit: int) -> int:
    """
    JIT-compiled sequential order search.

    Multiplies x = a mod n by a until x returns to 1. Each step depends on
    the previous one, so the loop is compiled rather than vectorized.

    Args:
        a: Base, already reduced modulo n
        n: Modulus (must be below JIT_MODULUS_LIMIT)
        limit: Give up once r exceeds this value

    Returns:
        The period r, or 0 when the ceiling was hit
    """
    x = a % n
    r = 1
    while x != 1:
        x = (x * a) % n
        r += 1
        if r > limit:
            return 0
    return r


# ============================================================================
# PART 2: POWER TABLE (Numba JIT + NumPy)
# ============================================================================

@njit
def _power_table_jit(a: int, n: int, count: int) -> np.ndarray:
    """
    JIT-compiled table of successive powers.

    Args:
        a: Base, already reduced modulo n
        n: Modulus (must be below JIT_MODULUS_LIMIT)
        count: Number of powers to produce

    Returns:
        int64 array where entry k - 1 holds a^k mod n for k = 1..count
    """
    table = np.empty(count, dtype=np.int64)
    x = 1
    for k in range(count):
        x = (x * a) % n
        table[k] = x
    return table


def is_minimal_period_jit(a: int, n: int, r: int) -> bool:
    """
    Vectorized period check for word-sized moduli.

    a^r must be 1 and no earlier power may be 1. The order of a unit
    modulo n is below n, so larger r is rejected before allocating.
    """
    if r < 1 or r >= n:
        return False
    table: np.ndarray = _power_table_jit(a % n, n, r)
    if table[-1] != 1:
        return False
    return not bool(np.any(table[:-1] == 1))


__all__: List[str] = [
    'JIT_MODULUS_LIMIT',
    'fits_jit',
    '_period_scan_jit',
    '_power_table_jit',
    'is_minimal_period_jit',
]
