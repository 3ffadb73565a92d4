"""Conflict detection between queens.

Every caller that needs to know whether queens attack each other (the board
screens, the hint engine, the submission validator and the benchmark
pipeline) goes through this module.

Rules
-----
Two positions ``a`` and ``b`` conflict iff any of:

- same row: ``a.row == b.row``
- same column: ``a.col == b.col``
- same diagonal: ``abs(a.row - b.row) == abs(a.col - b.col)``

Identical positions satisfy all three and therefore always conflict. The
checks only compare relative coordinates; nothing here validates board
bounds except ``is_valid_solution``.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set

from .position import Position

ROW = "row"
COLUMN = "column"
DIAGONAL = "diagonal"


class Conflict(NamedTuple):
    first: Position
    second: Position
    kind: str


def conflict_kind(a: Position, b: Position) -> Optional[str]:
    """Return the line shared by ``a`` and ``b``, or None if they are safe."""
    if a.row == b.row:
        return ROW
    if a.col == b.col:
        return COLUMN
    if abs(a.row - b.row) == abs(a.col - b.col):
        return DIAGONAL
    return None


def conflicting_pairs(placements: Sequence[Position]) -> List[Conflict]:
    """List every attacking pair, in input order of the first member.

    Reference O(k^2) scan over unordered pairs ``i < j``.
    """
    pairs: List[Conflict] = []
    count = len(placements)
    for i in range(count):
        first = placements[i]
        for j in range(i + 1, count):
            second = placements[j]
            kind = conflict_kind(first, second)
            if kind is not None:
                pairs.append(Conflict(first, second, kind))
    return pairs


def find_conflicts(placements: Iterable[Position]) -> Set[Position]:
    """Return the set of positions involved in at least one attacking pair.

    This is the "highlight these red" set: both members of a conflicting pair
    are reported, and a queen in several pairs appears once. Empty and
    single-queen inputs yield an empty set. The result does not depend on
    input order.
    """
    queens = list(placements)
    conflicting: Set[Position] = set()
    count = len(queens)
    for i in range(count):
        first = queens[i]
        for j in range(i + 1, count):
            second = queens[j]
            if (
                first.row == second.row
                or first.col == second.col
                or abs(first.row - second.row) == abs(first.col - second.col)
            ):
                conflicting.add(first)
                conflicting.add(second)
    return conflicting


def count_conflicts(placements: Iterable[Position]) -> int:
    """Count attacking pairs in O(k) using line occupancy.

    Each row, column and diagonal holding ``m`` queens contributes
    ``m * (m - 1) / 2`` pairs. Two distinct cells share at most one line, so
    for distinct positions this equals ``len(conflicting_pairs(...))``.
    Duplicated positions are counted once per shared line.
    """
    rows: Counter[int] = Counter()
    cols: Counter[int] = Counter()
    diag_down: Counter[int] = Counter()
    diag_up: Counter[int] = Counter()

    for position in placements:
        rows[position.row] += 1
        cols[position.col] += 1
        diag_down[position.row - position.col] += 1
        diag_up[position.row + position.col] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(rows) + _pairs(cols) + _pairs(diag_down) + _pairs(diag_up)


def is_valid_solution(placements: Sequence[Position], n: int) -> bool:
    """Return True if ``placements`` solves the ``n`` x ``n`` board.

    Contract
    - exactly ``n`` queens, ``n >= 1``
    - every coordinate is an int in ``[0, n-1]``
    - no duplicate positions and no attacking pair
    """
    if n < 1 or len(placements) != n:
        return False
    for position in placements:
        for value in (position.row, position.col):
            if not isinstance(value, int) or isinstance(value, bool):
                return False
            if value < 0 or value >= n:
                return False
    if len(set(placements)) != n:
        return False
    return not find_conflicts(placements)
