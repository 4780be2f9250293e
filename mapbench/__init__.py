"""Remove-then-insert microbenchmarks for third-party map implementations."""

from .runner import BenchmarkRunner, BenchmarkConfig, BenchmarkDefinition
from .selector import ConfigError, FilterChain, FilterRule, passes

__all__ = [
    "BenchmarkRunner",
    "BenchmarkConfig",
    "BenchmarkDefinition",
    "ConfigError",
    "FilterChain",
    "FilterRule",
    "passes",
]
