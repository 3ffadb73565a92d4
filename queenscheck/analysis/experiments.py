"""Benchmark runners for the conflict checkers (sequential and parallel).

For every board size N the runner:

- solves the board once with ``solve_first`` and times the validity check
  of that known-good solution;
- draws ``runs`` random boards of ``round(density * N)`` queens on distinct
  squares and times ``find_conflicts`` (pairwise), ``count_conflicts``
  (line occupancy) and ``is_valid_solution`` on each.

Outputs are ``BenchmarkResults`` dictionaries suitable for CSV export and
plotting. With ``validate=True`` the runner asserts that the two checkers
agree on every board and that solver output is accepted.
"""
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import settings
from .stats import BenchmarkResults, CheckRecord, ProgressPrinter, SolverEntry, summarize_runs
from queenscheck.backtracking import solve_first
from queenscheck.conflicts import conflicting_pairs, count_conflicts, find_conflicts, is_valid_solution
from queenscheck.position import Position


def random_placements(n: int, queens: int, rng: random.Random) -> List[Position]:
    """Place ``queens`` queens on distinct random squares of an N x N board."""
    if queens > n * n:
        raise ValueError(f"Cannot place {queens} queens on a {n}x{n} board")
    cells = rng.sample(range(n * n), queens)
    return [Position(cell // n, cell % n) for cell in cells]


def queens_for_density(n: int, density: float) -> int:
    return max(1, min(n * n, round(density * n)))


def _timed(fn: Callable[..., Any], *args: Any) -> Tuple[Any, float]:
    start = perf_counter()
    result = fn(*args)
    return result, perf_counter() - start


# Reusable worker -------------------------------------------------------------

def run_single_check(params: Tuple[int, int, int, int, bool]) -> CheckRecord:
    """Check one random board (picklable worker for parallel mapping)."""
    n, queens, run, seed, validate = params
    rng = random.Random(seed)
    board = random_placements(n, queens, rng)

    conflicting, pairwise_time = _timed(find_conflicts, board)
    pair_count, linecount_time = _timed(count_conflicts, board)
    valid, validity_time = _timed(is_valid_solution, board, n)

    if validate:
        reference = len(conflicting_pairs(board))
        if pair_count != reference:
            raise AssertionError(
                f"Checker disagreement for N={n}, run {run}: line count {pair_count} != pairwise {reference}"
            )
        if bool(conflicting) != (pair_count > 0):
            raise AssertionError(f"Conflict set and pair count disagree for N={n}, run {run}")
        if valid and (conflicting or queens != n):
            raise AssertionError(f"Board accepted as solved with conflicts for N={n}, run {run}")

    return {
        "n": n,
        "run": run,
        "queens": queens,
        "pairwise_time": pairwise_time,
        "linecount_time": linecount_time,
        "validity_time": validity_time,
        "conflicting_queens": len(conflicting),
        "conflict_pairs": pair_count,
        "valid": valid,
    }


def run_solver_check(n: int, time_limit: Optional[float], validate: bool = False) -> SolverEntry:
    """Solve N once and time the validity check of the solution."""
    solution, nodes, elapsed = solve_first(n, time_limit=time_limit)
    check_time = 0.0
    if solution is not None:
        valid, check_time = _timed(is_valid_solution, solution, n)
        if validate and not valid:
            raise AssertionError(f"Solver produced a board rejected by the checker for N={n}: {solution}")
    return {"solution_found": solution is not None, "nodes": nodes, "time": elapsed, "check_time": check_time}


def _seed_for(base_seed: int, n: int, run: int) -> int:
    return base_seed * 1_000_003 + n * 10_007 + run


def _size_params(n: int, runs: int, density: float, seed: int, validate: bool) -> List[Tuple[int, int, int, int, bool]]:
    queens = queens_for_density(n, density)
    return [(n, queens, run, _seed_for(seed, n, run), validate) for run in range(runs)]


# Sequential runner -----------------------------------------------------------

def run_benchmark(
    N_values: List[int],
    runs: int,
    density: float = 1.0,
    seed: int = 42,
    solver_time_limit: Optional[float] = None,
    benchmark_timeout: Optional[float] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> BenchmarkResults:
    """Run the checker benchmark for each N in order.

    Once ``benchmark_timeout`` seconds have passed, remaining sizes are
    skipped and the partial results are returned.
    """
    if runs < 1:
        raise ValueError("runs must be >= 1")
    results: BenchmarkResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    start = perf_counter()

    for index, n in enumerate(N_values, start=1):
        if benchmark_timeout is not None and perf_counter() - start > benchmark_timeout:
            print(f"  Benchmark timeout reached; skipping N >= {n}")
            break
        if progress:
            progress.update(index, f"N={n}")

        records = [run_single_check(params) for params in _size_params(n, runs, density, seed, validate)]
        entry = summarize_runs(records)
        entry["solver"] = run_solver_check(n, solver_time_limit, validate)
        results[n] = entry

    return results


# Parallel runner -------------------------------------------------------------

def run_benchmark_parallel(
    N_values: List[int],
    runs: int,
    density: float = 1.0,
    seed: int = 42,
    solver_time_limit: Optional[float] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    workers: Optional[int] = None,
) -> BenchmarkResults:
    """Same as ``run_benchmark`` with random boards spread over processes.

    Records are produced from per-run seeds, so the conflict counts match a
    sequential run with the same seed; only timings differ.
    """
    if runs < 1:
        raise ValueError("runs must be >= 1")
    results: BenchmarkResults = {}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    max_workers = workers or settings.NUM_PROCESSES

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        for index, n in enumerate(N_values, start=1):
            if progress:
                progress.update(index, f"N={n}")
            params = _size_params(n, runs, density, seed, validate)
            records: List[CheckRecord] = list(executor.map(run_single_check, params))
            entry = summarize_runs(records)
            entry["solver"] = run_solver_check(n, solver_time_limit, validate)
            results[n] = entry

    return results


def solver_summary(results: BenchmarkResults) -> Dict[int, SolverEntry]:
    return {n: entry["solver"] for n, entry in results.items() if "solver" in entry}
