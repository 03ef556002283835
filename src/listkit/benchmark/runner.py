"""Benchmark suite loading and execution.

A suite is a YAML file naming the workloads to run, the list size for
each, and the timing parameters shared by every workload:

.. code-block:: yaml

    name: lists
    min_runs: 5
    max_runs: 30
    warmup: 2
    target_cv: 0.02
    workloads:
      - name: push_pop
        size: 100000
      - name: iter_mut
        size: 100000
        enabled: false
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from listkit.benchmark.stats import (
    EMPTY_STATS,
    BenchmarkStats,
    format_stats,
    run_until_stable,
)
from listkit.benchmark.workloads import WORKLOADS, get_workload
from listkit.errors import ListError

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10_000


@dataclass
class WorkloadConfig:
    """One workload entry of a suite.

    Attributes:
        name: Registered workload name.
        size: Number of elements the workload operates on.
        enabled: Whether the workload runs by default.
    """

    name: str
    size: int = DEFAULT_SIZE
    enabled: bool = True


@dataclass
class BenchmarkSuite:
    """Workloads plus the timing parameters used for all of them."""

    name: str
    workloads: list[WorkloadConfig]
    min_runs: int = 5
    max_runs: int = 50
    warmup: int = 3
    target_cv: float = 0.01


@dataclass
class WorkloadResult:
    """Outcome of one workload.

    Attributes:
        workload: Workload name.
        size: Number of elements.
        stats: Timing statistics (EMPTY_STATS if the workload failed).
        error: Error message if the workload raised.
    """

    workload: str
    size: int
    stats: BenchmarkStats
    error: str | None = None


@dataclass
class BenchmarkProgress:
    """Progress callback information."""

    workload: str
    index: int
    total: int


ProgressCallback = Callable[[BenchmarkProgress], None]


def _parse_workload(entry: object, source: Path) -> WorkloadConfig:
    if isinstance(entry, str):
        entry = {"name": entry}
    if not isinstance(entry, dict) or "name" not in entry:
        msg = f"{source}: workload entries need a 'name': {entry!r}"
        raise ValueError(msg)

    name = entry["name"]
    if name not in WORKLOADS:
        msg = f"{source}: unknown workload '{name}'"
        raise ValueError(msg)

    size = int(entry.get("size", DEFAULT_SIZE))
    if size < 0:
        msg = f"{source}: workload '{name}' has negative size {size}"
        raise ValueError(msg)

    enabled = bool(entry.get("enabled", True))
    return WorkloadConfig(name=name, size=size, enabled=enabled)


def load_suite_config(config_path: Path | str) -> BenchmarkSuite:
    """Load a benchmark suite from YAML.

    Args:
        config_path: Path to the suite file.

    Returns:
        The parsed BenchmarkSuite.

    Raises:
        ValueError: If the file does not describe a valid suite.
    """
    config_path = Path(config_path)
    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        msg = f"{config_path}: expected a mapping at top level"
        raise ValueError(msg)

    workloads = [
        _parse_workload(entry, config_path) for entry in data.get("workloads", [])
    ]
    suite = BenchmarkSuite(
        name=data.get("name", config_path.stem),
        workloads=workloads,
        min_runs=int(data.get("min_runs", 5)),
        max_runs=int(data.get("max_runs", 50)),
        warmup=int(data.get("warmup", 3)),
        target_cv=float(data.get("target_cv", 0.01)),
    )
    logger.debug(
        f"Loaded suite '{suite.name}' with {len(workloads)} workloads "
        f"from {config_path}"
    )
    return suite


@dataclass
class BenchmarkRunner:
    """Runs the workloads of a suite.

    Attributes:
        suite: Suite to run.
        only: Restrict the run to these workload names (enabled or not).
        progress_callback: Optional callback invoked before each workload.
    """

    suite: BenchmarkSuite
    only: list[str] = field(default_factory=list)
    progress_callback: ProgressCallback | None = None

    def selected(self) -> list[WorkloadConfig]:
        if self.only:
            return [w for w in self.suite.workloads if w.name in self.only]
        return [w for w in self.suite.workloads if w.enabled]

    def run_workload(self, config: WorkloadConfig) -> WorkloadResult:
        runner = get_workload(config.name)(config.size)
        try:
            stats = run_until_stable(
                runner,
                min_runs=self.suite.min_runs,
                max_runs=self.suite.max_runs,
                target_cv=self.suite.target_cv,
                warmup=self.suite.warmup,
            )
        except (ListError, RecursionError) as e:
            logger.warning(f"Workload {config.name} failed: {e}")
            return WorkloadResult(config.name, config.size, EMPTY_STATS, error=str(e))
        summary = format_stats(stats, config.size)
        logger.info(f"{config.name} (n={config.size}): {summary}")
        return WorkloadResult(config.name, config.size, stats)

    def run(self) -> list[WorkloadResult]:
        selected = self.selected()
        results = []
        for index, config in enumerate(selected):
            if self.progress_callback:
                self.progress_callback(
                    BenchmarkProgress(config.name, index, len(selected))
                )
            results.append(self.run_workload(config))
        return results


def format_results_table(results: list[WorkloadResult]) -> str:
    """Format results as a plain-text table."""
    header = (
        f"{'Workload':<18} {'Size':>9} {'Mean (ms)':>11} {'CV %':>7} {'ns/elem':>9}"
    )
    lines = [header, "-" * len(header)]
    for result in results:
        if result.error:
            lines.append(
                f"{result.workload:<18} {result.size:>9} ERROR: {result.error}"
            )
            continue
        stats = result.stats
        per_elem = stats.mean / result.size * 1e9 if result.size else 0.0
        lines.append(
            f"{result.workload:<18} {result.size:>9} {stats.mean * 1000:>11.3f} "
            f"{stats.cv * 100:>7.2f} {per_elem:>9.1f}"
        )
    return "\n".join(lines)
