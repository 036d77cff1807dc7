"""Benchmark emphasis resolution.

Run with:
    pytest benchmarks/benchmark_emphasis.py -v --benchmark-only

Or for a quick timing table:
    python benchmarks/benchmark_emphasis.py
"""

import time


def _time_parse(source: str, iterations: int = 20) -> float:
    """Average seconds per parse of ``source``."""
    from realce import parse

    parse(source)  # Warmup

    start = time.perf_counter()
    for _ in range(iterations):
        parse(source)
    return (time.perf_counter() - start) / iterations


def main() -> None:
    """Print per-shape parse timings, checking that growth stays linear."""
    print("=" * 60)
    print("realce emphasis benchmark")
    print("=" * 60)

    shapes = {
        "plain text": lambda n: "word " * n,
        "matched pairs": lambda n: "*a* _b_ " * n,
        "unmatched openers": lambda n: "*a _b " * n,
        "discard heavy": lambda n: "_x " + "*y " * n + "z_",
        "deep nesting": lambda n: "*" * n + "a" + "*" * n,
        "unclosed links": lambda n: "[a](" * n,
        "nested brackets": lambda n: "[" * n + "a" + "](u)" * n,
    }

    for name, make in shapes.items():
        small = _time_parse(make(1000))
        large = _time_parse(make(10000))
        ratio = large / small if small else float("inf")
        print(f"{name:20} {small * 1000:8.2f}ms -> {large * 1000:8.2f}ms  (x{ratio:.1f} for 10x input)")


# pytest-benchmark integration
try:
    import pytest

    @pytest.mark.benchmark(group="parse-real-world")
    def test_benchmark_parse_real_world(benchmark, real_world_inlines):
        """Benchmark parse() on typical paragraph-sized inputs."""
        from realce import parse

        def parse_all():
            for source in real_world_inlines:
                parse(source)

        benchmark(parse_all)

    @pytest.mark.benchmark(group="parse-large")
    def test_benchmark_parse_large(benchmark, large_inline):
        """Benchmark parse() on one 100KB inline content."""
        from realce import parse

        benchmark(parse, large_inline)

    @pytest.mark.benchmark(group="parse-adversarial")
    def test_benchmark_deep_nesting(benchmark, deep_nesting):
        """Benchmark 2000-level nesting (iterative builder)."""
        from realce import parse

        benchmark(parse, deep_nesting)

    @pytest.mark.benchmark(group="parse-adversarial")
    def test_benchmark_unmatched_openers(benchmark, unmatched_openers):
        """Benchmark 20000 unmatched openers."""
        from realce import parse

        benchmark(parse, unmatched_openers)

    @pytest.mark.benchmark(group="render-only")
    def test_benchmark_render_only(benchmark, large_inline):
        """Benchmark render() on a pre-parsed tree."""
        from realce import parse, render

        nodes = parse(large_inline)
        benchmark(render, nodes)

    @pytest.mark.benchmark(group="markup")
    def test_benchmark_markup_parse_many(benchmark, real_world_inlines):
        """Benchmark Markup.parse_many (config set once per batch)."""
        from realce import Markup

        markup = Markup()
        benchmark(markup.parse_many, real_world_inlines * 50)

except ImportError:
    pass  # pytest not available


if __name__ == "__main__":
    main()
