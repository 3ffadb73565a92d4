"""Command-line interface and pipeline for the checker benchmark.

This module wires together configuration loading, benchmark execution
(sequential or parallel), CSV export and charts. It isolates I/O, argument
parsing and progress reporting from the core rules modules so that the rest
of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from . import settings
from .experiments import run_benchmark, run_benchmark_parallel
from .plots import plot_and_save
from .reporting import save_raw_data_to_csv, save_results_to_csv
from .stats import BenchmarkResults
from config_manager import ConfigManager
from queenscheck.backtracking import count_solutions, solve_first
from queenscheck.conflicts import find_conflicts, is_valid_solution
from queenscheck.position import Position


# ------------- Utils --------------------------------------------------------

def parse_sizes(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize ``--sizes`` inputs into a sorted list of unique board sizes.

    Accepts repeated flags (``-n 8 -n 16``) and comma-separated lists
    (``-n 8,16``). Returns None when no filter is provided.
    """
    if not size_args:
        return None
    sizes: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                value = int(token)
            except ValueError as exc:
                raise ValueError(f"Board size must be an integer, got '{token}'") from exc
            if value < 1:
                raise ValueError(f"Board size must be >= 1, got {value}")
            sizes.append(value)
    return sorted(set(sizes)) or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and update the ``settings`` module in place."""
    config_mgr = ConfigManager(config_path)

    bench = config_mgr.get_benchmark_settings()
    if "sizes" in bench:
        settings.N_VALUES = [int(n) for n in bench["sizes"]]
    if "runs" in bench:
        settings.RUNS = int(bench["runs"])
    if "density" in bench:
        settings.DENSITY = float(bench["density"])
    if "seed" in bench:
        settings.SEED = int(bench["seed"])
    if "output_dir" in bench:
        settings.OUT_DIR = str(bench["output_dir"])

    timeouts = config_mgr.get_timeout_settings()
    settings.set_timeouts(
        solver_timeout=timeouts.get("solver_timeout", settings.SOLVER_TIME_LIMIT),
        benchmark_timeout=timeouts.get("benchmark_timeout", settings.BENCHMARK_TIMEOUT),
    )
    return config_mgr


def export_results(results: BenchmarkResults, out_dir: str, plots: bool = True) -> None:
    save_results_to_csv(results, out_dir)
    save_raw_data_to_csv(results, out_dir)
    if plots:
        plot_and_save(results, out_dir)


# ------------- Pipelines ----------------------------------------------------

def main_sequential(validate: bool = False, plots: bool = True) -> BenchmarkResults:
    print("=" * 70)
    print("CHECKER BENCHMARK (sequential)")
    print("=" * 70)
    start = perf_counter()
    results = run_benchmark(
        settings.N_VALUES,
        settings.RUNS,
        density=settings.DENSITY,
        seed=settings.SEED,
        solver_time_limit=settings.SOLVER_TIME_LIMIT,
        benchmark_timeout=settings.BENCHMARK_TIMEOUT,
        progress_label="Benchmark",
        validate=validate,
    )
    export_results(results, settings.OUT_DIR, plots=plots)
    print(f"\nSequential benchmark completed in {perf_counter() - start:.1f}s")
    return results


def main_parallel(validate: bool = False, plots: bool = True) -> BenchmarkResults:
    print("=" * 70)
    print(f"CHECKER BENCHMARK (parallel, {settings.NUM_PROCESSES} workers)")
    print("=" * 70)
    start = perf_counter()
    results = run_benchmark_parallel(
        settings.N_VALUES,
        settings.RUNS,
        density=settings.DENSITY,
        seed=settings.SEED,
        solver_time_limit=settings.SOLVER_TIME_LIMIT,
        progress_label="Benchmark",
        validate=validate,
    )
    export_results(results, settings.OUT_DIR, plots=plots)
    print(f"\nParallel benchmark completed in {perf_counter() - start:.1f}s")
    return results


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of the checkers and pipeline.

    Verifies that:
    - The known 4-queens solution is accepted and the main diagonal is not.
    - The solver finds an accepted board for N=1..8 and the expected
      solution count for N=8.
    - The benchmark produces a non-empty summary CSV in a temporary folder.
    """
    print("Running quick regression tests...")

    known = [Position(0, 1), Position(1, 3), Position(2, 0), Position(3, 2)]
    if not is_valid_solution(known, 4):
        raise AssertionError("Known 4-queens solution was rejected.")
    diagonal = [Position(i, i) for i in range(4)]
    if find_conflicts(diagonal) != set(diagonal):
        raise AssertionError("Main diagonal was not reported as fully conflicting.")
    print("  Checker: known boards classified correctly")

    for n in (1, 4, 5, 6, 7, 8):
        solution, nodes, elapsed = solve_first(n, time_limit=5.0)
        if solution is None or not is_valid_solution(solution, n):
            raise AssertionError(f"Solver did not produce an accepted board for N={n}.")
        print(f"  Solver N={n}: nodes={nodes}, time={elapsed:.4f}s")
    if count_solutions(8) != 92:
        raise AssertionError("Expected 92 solutions for N=8.")

    results = run_benchmark([4, 8], runs=5, seed=7, solver_time_limit=5.0, validate=True)
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Summary CSV was not generated during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the benchmark entry point."""
    parser = argparse.ArgumentParser(description="Benchmark the N-Queens conflict checkers.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Execution mode: sequential (default, stable timings) or parallel.",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument(
        "--sizes",
        "-n",
        action="append",
        help="Board sizes to benchmark (comma-separated or multiple flags). Overrides the config.",
    )
    parser.add_argument("--runs", type=int, help="Random boards per size. Overrides the config.")
    parser.add_argument("--tag", help="Label appended to output filenames.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Cross-check checkers on every board (extra assertions).")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        apply_configuration(args.config)
        sizes = parse_sizes(args.sizes)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    if sizes:
        settings.N_VALUES = sizes
    if args.runs is not None:
        settings.RUNS = args.runs
    if args.tag:
        settings.RUN_TAG = args.tag

    print(f"Board sizes: {settings.N_VALUES}, runs per size: {settings.RUNS}")

    try:
        if args.mode == "parallel":
            main_parallel(validate=args.validate, plots=not args.no_plots)
        else:
            main_sequential(validate=args.validate, plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except (ValueError, OSError) as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
