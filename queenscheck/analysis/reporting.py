"""CSV export utilities for benchmark outputs (aggregates and raw runs).

Results are shaped into pandas DataFrames first so the same tables feed the
CSV writers and the plotting helpers.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List

import pandas as pd

from . import settings
from .experiments import solver_summary
from .stats import BenchmarkResults

SUMMARY_METRICS = ("pairwise_time", "linecount_time", "validity_time", "conflicting_queens")


def raw_runs_frame(results: BenchmarkResults) -> pd.DataFrame:
    """One row per random board: n, run, queens, timings, conflicts, valid."""
    rows: List[Dict[str, Any]] = []
    for n in sorted(results):
        rows.extend(results[n].get("raw_runs", []))
    columns = [
        "n",
        "run",
        "queens",
        "pairwise_time",
        "linecount_time",
        "validity_time",
        "conflicting_queens",
        "conflict_pairs",
        "valid",
    ]
    return pd.DataFrame(rows, columns=columns)


def summary_frame(results: BenchmarkResults) -> pd.DataFrame:
    """One row per board size with run statistics and the solver outcome.

    Column names follow lowercase snake_case: ``<metric>_<stat>`` for run
    statistics and ``solver_*`` for the reference solve.
    """
    solver = solver_summary(results)
    rows: List[Dict[str, Any]] = []
    for n in sorted(results):
        entry = results[n]
        row: Dict[str, Any] = {
            "n": n,
            "total_runs": entry.get("total_runs", 0),
            "conflict_rate": entry.get("conflict_rate", 0.0),
            "solved_rate": entry.get("solved_rate", 0.0),
        }
        for metric in SUMMARY_METRICS:
            summary = entry.get(metric, {})
            for stat in ("mean", "median", "std", "min", "max"):
                row[f"{metric}_{stat}"] = summary.get(stat)
        if n in solver:
            row["solver_solution_found"] = solver[n]["solution_found"]
            row["solver_nodes"] = solver[n]["nodes"]
            row["solver_time_seconds"] = solver[n]["time"]
            row["solver_check_time_seconds"] = solver[n]["check_time"]
        rows.append(row)
    return pd.DataFrame(rows)


def save_results_to_csv(results: BenchmarkResults, out_dir: str) -> str:
    """Write per-N aggregates to ``summary<suffix>.csv`` and return the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"summary{settings.filename_suffix()}.csv")
    summary_frame(results).to_csv(filename, index=False)
    print(f"Saved summary CSV: {filename}")
    return filename


def save_raw_data_to_csv(results: BenchmarkResults, out_dir: str) -> str:
    """Write every random-board record to ``raw_runs<suffix>.csv``."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs{settings.filename_suffix()}.csv")
    raw_runs_frame(results).to_csv(filename, index=False)
    print(f"Saved raw runs CSV: {filename}")
    return filename
