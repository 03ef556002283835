"""Command-line interface for the list benchmarks.

Provides the `listkit-benchmark` command with subcommands for:
- Running a benchmark suite
- Listing the available workloads
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from listkit.benchmark.runner import (
    BenchmarkProgress,
    BenchmarkRunner,
    format_results_table,
    load_suite_config,
)
from listkit.benchmark.workloads import WORKLOADS

DEFAULT_SUITE_PATH = (
    Path(__file__).parent.parent.parent.parent
    / "programs"
    / "benchmarks"
    / "suite.yaml"
)


def cmd_run(args: argparse.Namespace) -> int:
    """Run a benchmark suite."""
    suite_path = Path(args.suite) if args.suite else DEFAULT_SUITE_PATH
    if not suite_path.exists():
        print(f"Error: Suite configuration not found: {suite_path}")
        print("Create suite.yaml or specify --suite path")
        return 1

    try:
        suite = load_suite_config(suite_path)
    except (OSError, ValueError) as e:
        print(f"Error loading suite configuration: {e}")
        return 1

    if args.min_runs is not None:
        suite.min_runs = args.min_runs
    if args.max_runs is not None:
        suite.max_runs = args.max_runs
    if args.warmup is not None:
        suite.warmup = args.warmup
    if args.size is not None:
        for config in suite.workloads:
            config.size = args.size

    only = [name.strip() for name in args.only.split(",")] if args.only else []
    unknown = [name for name in only if name not in WORKLOADS]
    if unknown:
        print(f"Error: unknown workload(s): {', '.join(unknown)}")
        return 1

    def on_progress(progress: BenchmarkProgress) -> None:
        print(f"[{progress.index + 1}/{progress.total}] {progress.workload}...")

    runner = BenchmarkRunner(
        suite=suite,
        only=only,
        progress_callback=None if args.quiet else on_progress,
    )
    print(f"Suite: {suite.name}")
    results = runner.run()
    print()
    print(format_results_table(results))

    return 1 if any(r.error for r in results) else 0


def cmd_workloads(args: argparse.Namespace) -> int:
    """List registered workloads."""
    for name in sorted(WORKLOADS):
        doc = (WORKLOADS[name].__doc__ or "").strip().splitlines()
        print(f"  {name:<18} {doc[0] if doc else ''}".rstrip())
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="listkit-benchmark",
        description="Time the listkit list operations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run a benchmark suite")
    run_parser.add_argument(
        "--suite",
        help="Path to suite.yaml configuration",
    )
    run_parser.add_argument(
        "--only",
        help="Comma-separated workloads to run (default: all enabled)",
    )
    run_parser.add_argument(
        "--size",
        type=int,
        help="Override the size of every workload",
    )
    run_parser.add_argument(
        "--min-runs",
        type=int,
        help="Minimum number of timed runs",
    )
    run_parser.add_argument(
        "--max-runs",
        type=int,
        help="Maximum number of timed runs",
    )
    run_parser.add_argument(
        "--warmup",
        type=int,
        help="Number of warmup runs",
    )
    run_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    run_parser.set_defaults(func=cmd_run)

    workloads_parser = subparsers.add_parser(
        "workloads", help="List available workloads"
    )
    workloads_parser.set_defaults(func=cmd_workloads)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
