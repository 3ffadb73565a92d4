"""Typed result shapes and statistics helpers for the benchmark pipeline."""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class CheckRecord(TypedDict):
    n: int
    run: int
    queens: int
    pairwise_time: float
    linecount_time: float
    validity_time: float
    conflicting_queens: int
    conflict_pairs: int
    valid: bool


class SolverEntry(TypedDict):
    solution_found: bool
    nodes: int
    time: float
    check_time: float


class SizeEntry(TypedDict, total=False):
    total_runs: int
    conflict_rate: float
    solved_rate: float
    pairwise_time: StatsSummary
    linecount_time: StatsSummary
    validity_time: StatsSummary
    conflicting_queens: StatsSummary
    solver: SolverEntry
    raw_runs: List[CheckRecord]


BenchmarkResults = Dict[int, SizeEntry]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Values of ``total`` <= 0 are coerced to 1 to keep percentages defined.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles and range. Empty input yields ``count == 0`` and ``None``
    everywhere else so CSV columns stay aligned.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)
    min_val = sorted_vals[0]
    max_val = sorted_vals[-1]

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0.0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def summarize_runs(runs: List[CheckRecord]) -> SizeEntry:
    """Aggregate the random-board records of one board size."""
    total = len(runs)
    with_conflicts = sum(1 for r in runs if r["conflict_pairs"] > 0)
    solved = sum(1 for r in runs if r["valid"])
    return {
        "total_runs": total,
        "conflict_rate": with_conflicts / total if total else 0.0,
        "solved_rate": solved / total if total else 0.0,
        "pairwise_time": compute_detailed_statistics([r["pairwise_time"] for r in runs]),
        "linecount_time": compute_detailed_statistics([r["linecount_time"] for r in runs]),
        "validity_time": compute_detailed_statistics([r["validity_time"] for r in runs]),
        "conflicting_queens": compute_detailed_statistics([float(r["conflicting_queens"]) for r in runs]),
        "raw_runs": list(runs),
    }
