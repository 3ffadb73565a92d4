"""N-Queens rules engine: conflict checks, hints and submission validation."""

from .backtracking import complete_placement, count_solutions, iter_solutions, solve_first
from .board import attacked_cells, calculate_score, is_safe_placement, next_hint, render_board, safe_cells
from .conflicts import (
    Conflict,
    conflict_kind,
    conflicting_pairs,
    count_conflicts,
    find_conflicts,
    is_valid_solution,
)
from .errors import (
    InvalidPuzzleError,
    InvalidSolutionError,
    PlacementError,
    QueensError,
    RuleViolationError,
)
from .position import (
    Position,
    coerce_position,
    coerce_positions,
    positions_from_columns,
    positions_from_grid,
    positions_from_rows,
    positions_to_rows,
)
from .submission import (
    ChallengeRules,
    PuzzleDefinition,
    VerifiedSolution,
    check_solution,
    parse_placements,
    validate_puzzle,
    verify_submission,
)

__all__ = [
    # board values
    "Position",
    "Conflict",
    "coerce_position",
    "coerce_positions",
    "positions_from_rows",
    "positions_from_columns",
    "positions_from_grid",
    "positions_to_rows",
    # checker
    "find_conflicts",
    "is_valid_solution",
    "conflicting_pairs",
    "conflict_kind",
    "count_conflicts",
    # gameplay
    "is_safe_placement",
    "attacked_cells",
    "safe_cells",
    "next_hint",
    "calculate_score",
    "render_board",
    # solver
    "solve_first",
    "complete_placement",
    "iter_solutions",
    "count_solutions",
    # submission boundary
    "ChallengeRules",
    "VerifiedSolution",
    "PuzzleDefinition",
    "parse_placements",
    "check_solution",
    "verify_submission",
    "validate_puzzle",
    "QueensError",
    "PlacementError",
    "InvalidSolutionError",
    "RuleViolationError",
    "InvalidPuzzleError",
]
