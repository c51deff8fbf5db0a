#!/usr/bin/env python3
"""
Benchmark script for ferro-variantkey.

Compares:
1. Encode and decode time per variant for the pure Python codec
2. The same variants through the upstream ``variantkey`` C extension (if installed)

Usage:
    python scripts/benchmark_python.py
    python scripts/benchmark_python.py --iterations 100000
    python scripts/benchmark_python.py --include-upstream
"""

import argparse
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

# (name, chrom, pos, ref, alt) covering both ref/alt modes
TEST_VARIANTS = [
    # Compact mode
    ("snv", "1", 976157, "T", "C"),
    ("snv.chrX", "chrX", 155270560, "G", "A"),
    ("del.short", "1", 879311, "TTTC", "T"),
    ("ins.short", "7", 140753336, "A", "ATG"),
    ("mnv", "17", 7674220, "CC", "TT"),
    ("compact.max", "22", 50818468, "ACGTAC", "GTACG"),
    ("mt", "MT", 3243, "A", "G"),
    # Hash mode
    ("del.long", "13", 32316461, "CTTAAATTAAGATA", "C"),
    ("ins.long", "2", 47403190, "G", "GATCGATCGATCG"),
    ("iupac", "3", 12345, "N", "A"),
    ("lowercase", "4", 54321, "a", "c"),
    ("symbolic", "5", 1000000, "A", "<DEL>"),
]


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""

    name: str
    variant: str
    time_ns: float
    iterations: int

    @property
    def time_us(self) -> float:
        return self.time_ns / 1000

    @property
    def ops_per_sec(self) -> float:
        return 1_000_000_000 / self.time_ns if self.time_ns > 0 else 0


def benchmark_function(
    func: Callable[[], object],
    iterations: int,
    warmup: int = 100,
) -> float:
    """Benchmark a function, returning average time in nanoseconds."""
    # Warmup
    for _ in range(warmup):
        func()

    # Benchmark
    start = time.perf_counter_ns()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter_ns() - start

    return elapsed / iterations


def _label(chrom: str, pos: int, ref: str, alt: str) -> str:
    return f"{chrom}:{pos}:{ref}:{alt}"


def benchmark_encode(iterations: int) -> list[BenchmarkResult]:
    """Benchmark ferro-variantkey encoding."""
    import ferro_variantkey

    results = []
    for name, chrom, pos, ref, alt in TEST_VARIANTS:
        chrom_b, ref_b, alt_b = chrom.encode(), ref.encode(), alt.encode()
        time_ns = benchmark_function(
            lambda: ferro_variantkey.encode(chrom_b, pos, ref_b, alt_b), iterations
        )
        results.append(BenchmarkResult(name, _label(chrom, pos, ref, alt), time_ns, iterations))

    return results


def benchmark_decode(iterations: int) -> list[BenchmarkResult]:
    """Benchmark ferro-variantkey decoding."""
    import ferro_variantkey

    results = []
    for name, chrom, pos, ref, alt in TEST_VARIANTS:
        key = ferro_variantkey.encode(chrom, pos, ref, alt)
        time_ns = benchmark_function(lambda: ferro_variantkey.decode(key), iterations)
        results.append(BenchmarkResult(name, _label(chrom, pos, ref, alt), time_ns, iterations))

    return results


def benchmark_upstream_encode(iterations: int) -> list[BenchmarkResult] | None:
    """Benchmark the upstream variantkey C extension (if installed)."""
    try:
        import variantkey
    except ImportError:
        return None

    results = []
    for name, chrom, pos, ref, alt in TEST_VARIANTS:
        chrom_b, ref_b, alt_b = chrom.encode(), ref.encode(), alt.encode()
        # Upstream positions are 0-based
        pos0 = pos - 1
        try:
            time_ns = benchmark_function(
                lambda: variantkey.variantkey(chrom_b, pos0, ref_b, alt_b), iterations
            )
        except (TypeError, ValueError, AttributeError):
            # Older releases use a different call signature
            time_ns = float("nan")
        results.append(BenchmarkResult(name, _label(chrom, pos, ref, alt), time_ns, iterations))

    return results


def print_comparison_table(
    encode: list[BenchmarkResult],
    decode: list[BenchmarkResult],
    upstream: list[BenchmarkResult] | None,
) -> None:
    """Print a comparison table of all benchmarks."""
    print("\n" + "=" * 80)
    print("BENCHMARK RESULTS: VariantKey Encode/Decode Performance")
    print("=" * 80)

    # Header
    headers = ["Variant", "encode (us)", "decode (us)"]
    if upstream:
        headers.append("upstream (us)")
        headers.append("py/upstream")

    header_fmt = "{:<15}" + "{:>15}" * (len(headers) - 1)
    print(header_fmt.format(*headers))
    print("-" * (15 + 15 * (len(headers) - 1)))

    # Data rows
    for i, result in enumerate(encode):
        row = [result.name, f"{result.time_us:.2f}", f"{decode[i].time_us:.2f}"]

        if upstream:
            up_result = upstream[i]
            if math.isnan(up_result.time_ns) or up_result.time_ns <= 0:
                row.append("N/A")
                row.append("N/A")
            else:
                row.append(f"{up_result.time_us:.2f}")
                row.append(f"{result.time_ns / up_result.time_ns:.1f}x")

        print(header_fmt.format(*row))

    # Summary statistics
    print("-" * (15 + 15 * (len(headers) - 1)))

    avg_encode = sum(r.time_ns for r in encode) / len(encode)
    avg_decode = sum(r.time_ns for r in decode) / len(decode)
    row = ["AVERAGE", f"{avg_encode / 1000:.2f}", f"{avg_decode / 1000:.2f}"]

    valid_up = [r for r in upstream if not math.isnan(r.time_ns)] if upstream else []
    if upstream:
        if valid_up:
            avg_up = sum(r.time_ns for r in valid_up) / len(valid_up)
            row.append(f"{avg_up / 1000:.2f}")
            row.append(f"{avg_encode / avg_up:.1f}x")
        else:
            row.append("N/A")
            row.append("N/A")

    print(header_fmt.format(*row))

    # Throughput
    print("\n" + "-" * 40)
    print("THROUGHPUT (variants/second):")
    print("-" * 40)
    print(f"  encode:            {1_000_000_000 / avg_encode:,.0f} ops/sec")
    print(f"  decode:            {1_000_000_000 / avg_decode:,.0f} ops/sec")
    if valid_up:
        print(f"  upstream encode:   {1_000_000_000 / avg_up:,.0f} ops/sec")


def print_mode_analysis(encode: list[BenchmarkResult]) -> None:
    """Compare compact-mode and hash-mode encoding cost."""
    import ferro_variantkey

    print("\n" + "=" * 80)
    print("REF/ALT MODE ANALYSIS")
    print("=" * 80)

    by_mode: dict[str, list[float]] = {"Compact": [], "Hash": []}
    for result, (_, chrom, pos, ref, alt) in zip(encode, TEST_VARIANTS):
        mode = ferro_variantkey.refalt_mode(ferro_variantkey.encode(chrom, pos, ref, alt))
        by_mode[mode.name].append(result.time_ns)

    for mode, times in by_mode.items():
        if times:
            avg = sum(times) / len(times)
            print(f"  {mode:<8} {len(times):>3} variants, average {avg / 1000:.2f} us ({avg:.0f} ns)")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark ferro-variantkey",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/benchmark_python.py
    python scripts/benchmark_python.py --iterations 50000
    python scripts/benchmark_python.py --include-upstream
        """,
    )
    parser.add_argument(
        "--iterations",
        "-n",
        type=int,
        default=10000,
        help="Number of iterations per variant (default: 10000)",
    )
    parser.add_argument(
        "--include-upstream",
        action="store_true",
        help="Include upstream variantkey comparison (requires 'pip install variantkey')",
    )

    args = parser.parse_args()

    print(f"Running benchmarks with {args.iterations} iterations per variant...")
    print(f"Test variants: {len(TEST_VARIANTS)}")

    print("\n[1/3] Benchmarking encode...")
    encode = benchmark_encode(args.iterations)

    print("[2/3] Benchmarking decode...")
    decode = benchmark_decode(args.iterations)

    upstream = None
    if args.include_upstream:
        print("[3/3] Benchmarking upstream variantkey...")
        upstream = benchmark_upstream_encode(args.iterations)
        if upstream is None:
            print("      (variantkey not installed, skipping)")
            print("      Install with: pip install variantkey")
    else:
        print("[3/3] Skipping upstream variantkey (use --include-upstream to enable)")

    print_comparison_table(encode, decode, upstream)
    print_mode_analysis(encode)

    # Summary
    print("\n" + "=" * 80)
    print("SUMMARY")
    print("=" * 80)
    avg_us = sum(r.time_us for r in encode) / len(encode)
    print(f"ferro-variantkey: {avg_us:.2f} us/encode, {1_000_000 / avg_us:,.0f} encodes/sec")


if __name__ == "__main__":
    main()
