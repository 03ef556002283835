"""Timing statistics for list workloads.

Runs are repeated until their coefficient of variation (stddev/mean)
settles under a target; outliers are dropped using the IQR rule before the
summary is computed.
"""

from __future__ import annotations

import statistics
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class BenchmarkStats:
    """Summary of a series of timed runs.

    Attributes:
        times: Raw timings in seconds, in the order they were taken.
        mean: Mean of the retained timings.
        median: Median of the retained timings.
        stddev: Sample standard deviation of the retained timings.
        cv: Coefficient of variation (stddev/mean).
        min: Fastest retained timing.
        max: Slowest retained timing.
        outliers: Timings excluded by the IQR rule.
        runs: Number of timed runs (warmup excluded).
    """

    times: tuple[float, ...]
    mean: float
    median: float
    stddev: float
    cv: float
    min: float
    max: float
    outliers: tuple[float, ...] = field(default_factory=tuple)
    runs: int = 0


EMPTY_STATS = BenchmarkStats(
    times=(), mean=0.0, median=0.0, stddev=0.0, cv=0.0, min=0.0, max=0.0
)


def compute_quartiles(data: list[float]) -> tuple[float, float, float]:
    """Return (Q1, median, Q3), using the median of each half for Q1/Q3.

    With fewer than 4 values all three are the median.
    """
    if len(data) < 4:
        med = statistics.median(data)
        return med, med, med

    ordered = sorted(data)
    half = len(ordered) // 2
    lower = ordered[:half]
    upper = ordered[half:] if len(ordered) % 2 == 0 else ordered[half + 1 :]
    return (
        statistics.median(lower),
        statistics.median(ordered),
        statistics.median(upper),
    )


def detect_outliers(data: list[float], factor: float = 1.5) -> list[float]:
    """Values outside [Q1 - factor*IQR, Q3 + factor*IQR]."""
    if len(data) < 4:
        return []

    q1, _, q3 = compute_quartiles(data)
    spread = factor * (q3 - q1)
    return [x for x in data if x < q1 - spread or x > q3 + spread]


def compute_stats(times: list[float], remove_outliers: bool = True) -> BenchmarkStats:
    """Summarize timings, optionally excluding outliers.

    Args:
        times: Timings in seconds.
        remove_outliers: Exclude IQR outliers from the summary, as long as
            at least two timings remain.

    Returns:
        BenchmarkStats for the timings (EMPTY_STATS if there are none).
    """
    if not times:
        return EMPTY_STATS

    outliers = detect_outliers(times)
    kept = times
    if remove_outliers and outliers:
        excluded = set(outliers)
        filtered = [t for t in times if t not in excluded]
        if len(filtered) >= 2:
            kept = filtered

    mean = statistics.mean(kept)
    stddev = statistics.stdev(kept) if len(kept) > 1 else 0.0
    return BenchmarkStats(
        times=tuple(times),
        mean=mean,
        median=statistics.median(kept),
        stddev=stddev,
        cv=stddev / mean if mean > 0 else 0.0,
        min=min(kept),
        max=max(kept),
        outliers=tuple(outliers),
        runs=len(times),
    )


def _cv(times: list[float]) -> float:
    if not times:
        return float("inf")
    mean = statistics.mean(times)
    if mean <= 0 or len(times) < 2:
        return 0.0
    return statistics.stdev(times) / mean


def run_until_stable(
    runner: Callable[[], float],
    min_runs: int = 5,
    max_runs: int = 50,
    target_cv: float = 0.01,
    warmup: int = 3,
    batch_size: int = 5,
) -> BenchmarkStats:
    """Time ``runner`` until the CV drops under ``target_cv``.

    Args:
        runner: Callable performing one run and returning its duration.
        min_runs: Timed runs taken before the CV is first checked.
        max_runs: Upper bound on timed runs.
        target_cv: Stop once the coefficient of variation is at or below this.
        warmup: Untimed runs performed first.
        batch_size: Runs added between CV checks.

    Returns:
        BenchmarkStats over every timed run.
    """
    for _ in range(warmup):
        runner()

    times = [runner() for _ in range(min_runs)]
    while len(times) < max_runs and _cv(times) > target_cv:
        for _ in range(min(batch_size, max_runs - len(times))):
            times.append(runner())

    return compute_stats(times)


def format_stats(stats: BenchmarkStats, size: int = 0) -> str:
    """Render stats like ``"4.21ms +/- 0.03ms (CV=0.71%, 10 runs, 42.1ns/elem)"``."""
    mean_ms = stats.mean * 1000.0
    stddev_ms = stats.stddev * 1000.0
    text = (
        f"{mean_ms:.2f}ms +/- {stddev_ms:.2f}ms "
        f"(CV={stats.cv * 100:.2f}%, {len(stats.times)} runs"
    )
    if size > 0:
        text += f", {stats.mean / size * 1e9:.1f}ns/elem"
    return text + ")"
