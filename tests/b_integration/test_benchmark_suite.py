"""Integration tests for loading and running benchmark suites."""

from __future__ import annotations

from pathlib import Path

import pytest

from listkit.benchmark.runner import (
    BenchmarkRunner,
    BenchmarkSuite,
    WorkloadConfig,
    format_results_table,
    load_suite_config,
)
from listkit.benchmark.workloads import WORKLOADS
from listkit.errors import BorrowError

DEFAULT_SUITE = Path(__file__).parents[2] / "programs" / "benchmarks" / "suite.yaml"


def write_suite(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "suite.yaml"
    path.write_text(text)
    return path


def tiny_suite(*names: str) -> BenchmarkSuite:
    return BenchmarkSuite(
        name="tiny",
        workloads=[WorkloadConfig(name, size=50) for name in names],
        min_runs=2,
        max_runs=3,
        warmup=0,
    )


class TestLoadSuiteConfig:
    """Tests for load_suite_config."""

    def test_load(self, tmp_path: Path) -> None:
        """A suite file is parsed with its workloads and parameters."""
        path = write_suite(
            tmp_path,
            """
name: quick
min_runs: 2
max_runs: 4
warmup: 1
target_cv: 0.05
workloads:
  - name: push_pop
    size: 1000
  - name: iter_mut
    enabled: false
  - persistent_iter
""",
        )
        suite = load_suite_config(path)

        assert suite.name == "quick"
        assert (suite.min_runs, suite.max_runs, suite.warmup) == (2, 4, 1)
        assert suite.target_cv == 0.05
        names = [w.name for w in suite.workloads]
        assert names == ["push_pop", "iter_mut", "persistent_iter"]
        assert suite.workloads[0].size == 1000
        assert not suite.workloads[1].enabled
        assert suite.workloads[2].size == 10_000

    def test_defaults(self, tmp_path: Path) -> None:
        """Missing keys fall back to defaults."""
        suite = load_suite_config(write_suite(tmp_path, "workloads: []\n"))
        assert suite.name == "suite"
        assert suite.workloads == []
        assert suite.min_runs == 5

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file is an empty suite."""
        suite = load_suite_config(write_suite(tmp_path, ""))
        assert suite.workloads == []

    def test_unknown_workload_entry(self, tmp_path: Path) -> None:
        """Unknown workload names are rejected."""
        path = write_suite(tmp_path, "workloads:\n  - name: quicksort\n")
        with pytest.raises(ValueError, match="unknown workload 'quicksort'"):
            load_suite_config(path)

    def test_negative_size(self, tmp_path: Path) -> None:
        """Negative sizes are rejected."""
        path = write_suite(tmp_path, "workloads:\n  - name: peek\n    size: -1\n")
        with pytest.raises(ValueError, match="negative size"):
            load_suite_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """The top level must be a mapping."""
        with pytest.raises(ValueError, match="expected a mapping"):
            load_suite_config(write_suite(tmp_path, "- push_pop\n"))

    def test_default_suite_covers_every_workload(self) -> None:
        """The shipped suite lists every workload."""
        suite = load_suite_config(DEFAULT_SUITE)
        assert {w.name for w in suite.workloads} == set(WORKLOADS)


class TestBenchmarkRunner:
    """Tests for BenchmarkRunner."""

    def test_run(self) -> None:
        """Selected workloads run in order and report progress."""
        progress = []
        runner = BenchmarkRunner(
            suite=tiny_suite("push_pop", "owned_drop", "shared_suffix"),
            progress_callback=progress.append,
        )
        results = runner.run()

        names = [r.workload for r in results]
        assert names == ["push_pop", "owned_drop", "shared_suffix"]
        assert all(r.error is None for r in results)
        assert all(2 <= r.stats.runs <= 3 for r in results)
        assert [(p.index, p.total) for p in progress] == [(0, 3), (1, 3), (2, 3)]

    def test_disabled_workloads_skipped(self) -> None:
        """Disabled workloads are skipped."""
        suite = tiny_suite("push_pop", "peek")
        suite.workloads[1].enabled = False
        results = BenchmarkRunner(suite=suite).run()
        assert [r.workload for r in results] == ["push_pop"]

    def test_only_selects_disabled_workloads(self) -> None:
        """--only can select disabled workloads."""
        suite = tiny_suite("push_pop", "peek")
        suite.workloads[1].enabled = False
        results = BenchmarkRunner(suite=suite, only=["peek"]).run()
        assert [r.workload for r in results] == ["peek"]

    def test_failing_workload_reports_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failing workload is reported without stopping the run."""

        def broken(size: int):
            """Always fails."""

            def run() -> float:
                msg = "cannot push: already exclusively borrowed"
                raise BorrowError(msg)

            return run

        monkeypatch.setitem(WORKLOADS, "broken", broken)
        results = BenchmarkRunner(suite=tiny_suite("broken", "peek")).run()

        assert results[0].error == "cannot push: already exclusively borrowed"
        assert results[0].stats.runs == 0
        assert results[1].error is None

        table = format_results_table(results)
        assert "broken" in table
        assert "ERROR" in table
        assert "peek" in table
