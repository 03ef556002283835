"""Timing harness for the listkit list operations.

Workloads are configured by a YAML suite and timed adaptively until their
coefficient of variation settles.
"""

from __future__ import annotations

from listkit.benchmark.runner import BenchmarkRunner, BenchmarkSuite, load_suite_config
from listkit.benchmark.stats import BenchmarkStats, run_until_stable
from listkit.benchmark.workloads import WORKLOADS, get_workload

__all__ = [
    "WORKLOADS",
    "BenchmarkRunner",
    "BenchmarkStats",
    "BenchmarkSuite",
    "get_workload",
    "load_suite_config",
    "run_until_stable",
]
