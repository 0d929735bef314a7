from xgbridge.benchmark.runner import BenchmarkRunner, BenchmarkResult

__all__ = [
    "BenchmarkRunner",
    "BenchmarkResult",
]
