"""
Benchmark and reporting package for the conflict checkers.

This package contains:
- settings: global knobs and timeouts
- stats: typed summaries and aggregation helpers
- experiments: sequential and parallel benchmark runners
- reporting: CSV exports built on pandas DataFrames
- plots: all visualization utilities
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    CheckRecord,
    SolverEntry,
    SizeEntry,
    BenchmarkResults,
    compute_detailed_statistics,
    summarize_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "CheckRecord",
    "SolverEntry",
    "SizeEntry",
    "BenchmarkResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
