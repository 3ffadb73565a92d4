"""Global settings for the checker benchmark pipeline.

This module centralizes tunable constants used across the analysis code.
Values can be overridden at runtime via the configuration loader in
`queenscheck.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board sizes to evaluate (in ascending order)
N_VALUES: List[int] = [4, 8, 12, 16, 24, 32]

# Random boards checked per size
RUNS: int = 30

# Queens per random board as a fraction of N (1.0 = a full board of N queens)
DENSITY: float = 1.0

# Base seed; each (N, run) pair derives its own seed from it
SEED: int = 42

# Time limit for the reference solver per N in seconds (None = no limit)
SOLVER_TIME_LIMIT: Optional[float] = 10.0

# Global cap for a whole benchmark in seconds (None = no limit)
BENCHMARK_TIMEOUT: Optional[float] = 300.0

# Output directory for CSV and charts
OUT_DIR: str = "results_queenscheck"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix shared by every
# artifact of the same run (e.g., _20251113-142530).
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames
RUN_TAG: Optional[str] = None


def set_timeouts(
        solver_timeout: Optional[float] = 10.0,
        benchmark_timeout: Optional[float] = 300.0,
) -> None:
        """Configure the solver and whole-benchmark time limits.

        Side effects
        - Updates module-level globals and prints a concise summary so the
            active limits are explicit at run start.
        """
        global SOLVER_TIME_LIMIT, BENCHMARK_TIMEOUT
        SOLVER_TIME_LIMIT = solver_timeout
        BENCHMARK_TIMEOUT = benchmark_timeout

        print("Timeout settings configured:")
        print(f"   - Solver: {SOLVER_TIME_LIMIT}s" if SOLVER_TIME_LIMIT else "   - Solver: unlimited")
        print(
                f"   - Benchmark: {BENCHMARK_TIMEOUT}s"
                if BENCHMARK_TIMEOUT
                else "   - Benchmark: unlimited"
        )


def filename_suffix() -> str:
    """Return ``_<tag>_<run id>`` according to the naming policy, or ``""``."""
    parts: List[str] = []
    if RUN_TAG:
        parts.append(str(RUN_TAG))
    if DATE_IN_FILENAMES and RUN_ID:
        parts.append(RUN_ID)
    return ("_" + "_".join(parts)) if parts else ""
