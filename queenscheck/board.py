"""Gameplay helpers built on top of the conflict checker.

These are the queries a board screen makes between moves: is this square
safe, which squares are covered, what should the hint button suggest, and
how many points a finished board is worth.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Set

from .backtracking import complete_placement
from .conflicts import conflict_kind, find_conflicts
from .position import Position, coerce_positions

# Base points per board row, bonus pool for fast finishes, cost of a hint.
POINTS_PER_ROW = 100
TIME_BONUS_POOL = 1000
HINT_PENALTY = 50

# Hints backed by a full solution are only searched for up to this long.
HINT_SEARCH_SECONDS = 0.5


def is_safe_placement(placements: Iterable[Position], position: Position) -> bool:
    """True if no queen occupies or attacks ``position``."""
    return all(conflict_kind(queen, position) is None for queen in placements)


def attacked_cells(placements: Iterable[Position], n: int) -> Set[Position]:
    """Every cell of the board that holds or is attacked by a queen."""
    queens = list(placements)
    covered: Set[Position] = set()
    for row in range(n):
        for col in range(n):
            cell = Position(row, col)
            if not is_safe_placement(queens, cell):
                covered.add(cell)
    return covered


def safe_cells(placements: Iterable[Position], n: int) -> Set[Position]:
    queens = list(placements)
    covered = attacked_cells(queens, n)
    return {
        Position(row, col)
        for row in range(n)
        for col in range(n)
        if Position(row, col) not in covered
    }


def next_hint(
    placements: Sequence[Position],
    n: int,
    locked: Iterable[object] = (),
) -> Optional[Position]:
    """Suggest an empty, safe square for the next queen.

    When the current queens are conflict-free, the suggestion is taken from a
    full solution that keeps them, so following hints always finishes the
    board. Otherwise, or when no completion exists, the first safe square in
    row-major order is returned. Locked squares are never suggested.
    """
    queens = list(placements)
    blocked = set(coerce_positions(locked))
    occupied = set(queens)

    if not find_conflicts(queens):
        solution, _, _ = complete_placement(
            n, fixed=queens, forbidden=blocked - occupied, time_limit=HINT_SEARCH_SECONDS
        )
        if solution is not None:
            for cell in sorted(solution):
                if cell not in occupied:
                    return cell

    for row in range(n):
        for col in range(n):
            cell = Position(row, col)
            if cell in blocked or cell in occupied:
                continue
            if is_safe_placement(queens, cell):
                return cell
    return None


def calculate_score(n: int, seconds: float, hints_used: int = 0) -> int:
    """Score a finished board: size points plus a time bonus minus hints."""
    base = n * POINTS_PER_ROW
    time_bonus = max(0, TIME_BONUS_POOL - seconds)
    penalty = hints_used * HINT_PENALTY
    return max(0, math.floor(base + time_bonus - penalty))


def render_board(placements: Iterable[Position], n: int) -> str:
    """Text grid: ``Q`` queen, ``X`` attacked queen, ``.`` empty square."""
    queens = list(placements)
    conflicting = find_conflicts(queens)
    occupied = set(queens)
    lines: List[str] = []
    for row in range(n):
        cells = []
        for col in range(n):
            cell = Position(row, col)
            if cell in conflicting:
                cells.append("X")
            elif cell in occupied:
                cells.append("Q")
            else:
                cells.append(".")
        lines.append(" ".join(cells))
    return "\n".join(lines)
