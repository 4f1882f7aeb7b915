"""
Benchmark suite for the classical Shor simulator.

Benchmarks:
1. Primitives: gcd, modpow, Miller-Rabin
2. Period Finder: Numba JIT scan vs pure Python scan, cache impact
3. Factor Extractor: complete shor_factor() runs on semiprimes
"""

import time
import sys
import random
import statistics
from typing import List, Callable

from classical_shor import (
    gcd, modpow, is_prime, find_period, shor_factor, clear_caches, _period_scan
)
from jit_operations import _period_scan_jit


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float], operations: int = 1):
        self.name = name
        self.times = sorted(times)
        self.operations = operations

        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:8.3f}ms | "
                f"Median: {self.median*1000:8.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:8.3f}ms | "
                f"Max: {self.max*1000:8.3f}ms")


def benchmark(func: Callable, *args, iterations: int = 5, **kwargs) -> BenchmarkResult:
    """
    Benchmark a function and return statistics.

    Args:
        func: Function to benchmark
        *args: Positional arguments to function
        iterations: Number of iterations to run
        **kwargs: Keyword arguments to function

    Returns:
        BenchmarkResult with timing statistics
    """
    times = []

    # Warm up (also triggers JIT compilation)
    func(*args, **kwargs)

    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    return BenchmarkResult(func.__name__, times)


# ============================================================================
# 1. PRIMITIVES
# ============================================================================

def benchmark_primitives():
    """Benchmark gcd, modpow and the primality test."""
    print("\n" + "="*100)
    print("PRIMITIVE BENCHMARKS")
    print("="*100)

    big = 2**521 - 1
    cases = [
        ("gcd (small)", gcd, (48, 18)),
        ("gcd (521-bit)", gcd, (big, 2**400 + 1)),
        ("modpow (small)", modpow, (4, 13, 497)),
        ("modpow (521-bit)", modpow, (3, big - 1, big)),
        ("is_prime (521-bit Mersenne)", is_prime.__wrapped__, (big,)),
    ]
    for description, func, args in cases:
        result = benchmark(func, *args, iterations=20)
        result.name = description
        print(result)


# ============================================================================
# 2. PERIOD FINDER
# ============================================================================

def benchmark_period_finder():
    """Compare the JIT period scan with the pure Python scan."""
    print("\n" + "="*100)
    print("PERIOD FINDER BENCHMARKS")
    print("="*100)

    # (a, n) pairs with long periods
    cases = [
        (2, 10403),      # 101 * 103
        (3, 1022117),    # 1009 * 1013
        (2, 100160063),  # 10007 * 10009
    ]
    for a, n in cases:
        limit = n * n
        jit = benchmark(_period_scan_jit, a, n, limit, iterations=5)
        jit.name = f"JIT scan a={a} n={n}"
        print(jit)
        # the pure Python scan takes minutes on the largest modulus
        if n < 10**7:
            py = benchmark(_period_scan, a, n, limit, iterations=3)
            py.name = f"Python scan a={a} n={n}"
            print(py)
            print(f"  → JIT speedup: {py.mean / jit.mean:.1f}x\n")

    # Cache impact: the second lookup of the same base is a dict hit
    clear_caches()
    a, n = cases[-1]
    start = time.perf_counter()
    find_period(a, n)
    fresh = time.perf_counter() - start
    start = time.perf_counter()
    find_period(a, n)
    cached = time.perf_counter() - start
    print(f"find_period fresh: {fresh*1000:.3f}ms, cached: {cached*1000:.3f}ms")


# ============================================================================
# 3. FACTOR EXTRACTOR
# ============================================================================

def benchmark_factor():
    """Benchmark complete shor_factor() runs on semiprimes."""
    print("\n" + "="*100)
    print("FACTOR EXTRACTOR BENCHMARKS")
    print("="*100)

    semiprimes = [
        (15, "3 * 5"),
        (10403, "101 * 103"),
        (1022117, "1009 * 1013"),
        (100160063, "10007 * 10009"),
    ]
    for n, description in semiprimes:
        times = []
        attempts = []
        for seed in range(5):
            clear_caches()
            rng = random.Random(seed)
            start = time.perf_counter()
            result = shor_factor(n, rng=rng)
            times.append(time.perf_counter() - start)
            attempts.append(result.attempts)
        bench = BenchmarkResult(f"shor_factor {n} ({description})", times)
        print(bench)
        print(f"  → Mean attempts: {statistics.mean(attempts):.1f}\n")


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    print("\n")
    print("╔" + "="*98 + "╗")
    print("║" + " "*25 + "CLASSICAL SHOR SIMULATOR BENCHMARK SUITE" + " "*33 + "║")
    print("╚" + "="*98 + "╝")

    try:
        benchmark_primitives()
        benchmark_period_finder()
        benchmark_factor()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run_all_benchmarks()
