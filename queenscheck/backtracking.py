"""Backtracking solution generator for N-Queens boards.

The game needs known-good solutions in three places: to test the checkers,
to build hints that lead to a finished board, and to prove that a puzzle
with starting queens and forbidden squares can still be solved. All searches
here are non-recursive.

Entry points
------------
- solve_first(size, time_limit=None): plain left-to-right search returning
    the lexicographically first solution.
- complete_placement(size, fixed=(), forbidden=(), time_limit=None): Most
    Constrained Variable search that keeps ``fixed`` queens and never uses
    ``forbidden`` cells.
- iter_solutions(size) / count_solutions(size): every solution, in order.

``solve_first`` and ``complete_placement`` return a tuple
        (solution: Optional[List[Position]], nodes_explored: int, elapsed_seconds: float)

Implementation overview
-----------------------
- State representation: ``positions[c] = r`` means a queen on row r, column c;
    ``-1`` means unassigned. Results are converted to ``Position`` values.
- Constraint tracking: ``row_used[r]``, ``diag1_used[r-c+offset]`` and
    ``diag2_used[r+c]`` give O(1) safety checks, with ``offset = size - 1``.
- Nodes explored: incremented every time a candidate row is evaluated for a
    column, even if it is rejected immediately.
- Timeouts: if ``time_limit`` is exceeded the solver returns
    ``(None, explored, elapsed)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .conflicts import find_conflicts
from .position import Position, coerce_positions, positions_from_columns

SearchResult = Tuple[Optional[List[Position]], int, float]


@dataclass
class _Frame:
    """Mutable stack frame capturing the state at a decision level."""

    column: int
    candidates: List[int]
    next_index: int = 0


def _check_size(size: int) -> None:
    if size < 1:
        raise ValueError("Board size must be at least 1.")


def solve_first(size: int, time_limit: Optional[float] = None) -> SearchResult:
    """Find the first solution via plain iterative backtracking.

    Columns are assigned in order 0..N-1 and rows tried top to bottom, so the
    result is the lexicographically first ``board[col] = row`` solution.
    """
    _check_size(size)
    positions = [-1] * size
    row_used = [False] * size
    diag1_used = [False] * (2 * size - 1)
    diag2_used = [False] * (2 * size - 1)

    column = 0
    row = 0
    explored = 0
    start = perf_counter()

    while 0 <= column < size:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        placed = False
        while row < size and not placed:
            explored += 1
            diag1_index = row - column + (size - 1)
            diag2_index = row + column
            if row_used[row] or diag1_used[diag1_index] or diag2_used[diag2_index]:
                row += 1
                continue
            positions[column] = row
            row_used[row] = True
            diag1_used[diag1_index] = True
            diag2_used[diag2_index] = True
            placed = True
            if column == size - 1:
                return positions_from_columns(positions), explored, perf_counter() - start
            column += 1
            row = 0

        if not placed:
            # Exhausted all rows in this column; undo the previous decision.
            column -= 1
            if column >= 0:
                previous_row = positions[column]
                positions[column] = -1
                row_used[previous_row] = False
                diag1_used[previous_row - column + (size - 1)] = False
                diag2_used[previous_row + column] = False
                row = previous_row + 1

    return None, explored, perf_counter() - start


def iter_solutions(size: int) -> Iterator[List[Position]]:
    """Yield every solution of the ``size`` x ``size`` board in order.

    Uses the same column-by-column scan as ``solve_first`` but, instead of
    stopping at the last column, yields and keeps scanning its remaining rows.
    """
    _check_size(size)
    offset = size - 1
    positions = [-1] * size
    row_used = [False] * size
    diag1_used = [False] * (2 * size - 1)
    diag2_used = [False] * (2 * size - 1)
    column = 0
    row = 0

    while column >= 0:
        while row < size and (
            row_used[row] or diag1_used[row - column + offset] or diag2_used[row + column]
        ):
            row += 1

        if row < size:
            positions[column] = row
            if column == size - 1:
                yield positions_from_columns(positions)
                positions[column] = -1
                row += 1
                continue
            row_used[row] = True
            diag1_used[row - column + offset] = True
            diag2_used[row + column] = True
            column += 1
            row = 0
            continue

        column -= 1
        if column >= 0:
            previous_row = positions[column]
            positions[column] = -1
            row_used[previous_row] = False
            diag1_used[previous_row - column + offset] = False
            diag2_used[previous_row + column] = False
            row = previous_row + 1


def count_solutions(size: int) -> int:
    """Number of distinct solutions (1, 0, 0, 2, 10, 4, 40, 92 for N=1..8)."""
    return sum(1 for _ in iter_solutions(size))


@dataclass
class _Board:
    """Column assignment plus the row and diagonal occupancy masks."""

    size: int
    forbidden: FrozenSet[Tuple[int, int]]
    positions: List[int] = field(init=False)
    row_used: List[bool] = field(init=False)
    diag1_used: List[bool] = field(init=False)
    diag2_used: List[bool] = field(init=False)

    def __post_init__(self) -> None:
        self.positions = [-1] * self.size
        self.row_used = [False] * self.size
        self.diag1_used = [False] * (2 * self.size - 1)
        self.diag2_used = [False] * (2 * self.size - 1)

    def is_free(self, row: int, column: int) -> bool:
        return not (
            self.row_used[row]
            or self.diag1_used[row - column + self.size - 1]
            or self.diag2_used[row + column]
        )

    def place(self, row: int, column: int) -> None:
        self.positions[column] = row
        self.row_used[row] = True
        self.diag1_used[row - column + self.size - 1] = True
        self.diag2_used[row + column] = True

    def lift(self, column: int) -> None:
        row = self.positions[column]
        if row == -1:
            return
        self.positions[column] = -1
        self.row_used[row] = False
        self.diag1_used[row - column + self.size - 1] = False
        self.diag2_used[row + column] = False

    def open_rows(self, column: int) -> List[int]:
        """Rows that are unattacked and allowed in ``column``, ascending."""
        return [
            row
            for row in range(self.size)
            if (row, column) not in self.forbidden and self.is_free(row, column)
        ]

    def most_constrained(self, unassigned: List[int]) -> Tuple[int, List[int]]:
        """Unassigned column with the fewest open rows (lowest index on ties).

        A column with no open rows is returned as soon as it is seen.
        """
        best_column = unassigned[0]
        best_rows: Optional[List[int]] = None
        for column in sorted(unassigned):
            rows = self.open_rows(column)
            if not rows:
                return column, rows
            if best_rows is None or len(rows) < len(best_rows):
                best_column, best_rows = column, rows
                if len(rows) == 1:
                    break
        return best_column, best_rows or []


def _search_completion(board: _Board, time_limit: Optional[float]) -> SearchResult:
    """Depth-first search over the empty columns of ``board``.

    Each stack frame owns one column and the rows still to try there. A frame
    whose rows run out is popped and its column becomes free again; an empty
    stack means the search space is exhausted.
    """
    start = perf_counter()
    unassigned = [column for column in range(board.size) if board.positions[column] == -1]
    if not unassigned:
        return positions_from_columns(board.positions), 0, perf_counter() - start

    column, rows = board.most_constrained(unassigned)
    unassigned.remove(column)
    stack: List[_Frame] = [_Frame(column, rows)]
    explored = 0

    while stack:
        if time_limit is not None and (perf_counter() - start) > time_limit:
            return None, explored, perf_counter() - start

        frame = stack[-1]
        board.lift(frame.column)
        if frame.next_index >= len(frame.candidates):
            stack.pop()
            unassigned.append(frame.column)
            continue

        row = frame.candidates[frame.next_index]
        frame.next_index += 1
        explored += 1
        if not board.is_free(row, frame.column):
            continue
        board.place(row, frame.column)

        if not unassigned:
            return positions_from_columns(board.positions), explored, perf_counter() - start

        column, rows = board.most_constrained(unassigned)
        if rows:
            unassigned.remove(column)
            stack.append(_Frame(column, rows))

    return None, explored, perf_counter() - start


def complete_placement(
    size: int,
    fixed: Iterable[object] = (),
    forbidden: Iterable[object] = (),
    time_limit: Optional[float] = None,
) -> SearchResult:
    """Extend ``fixed`` queens to a full solution avoiding ``forbidden`` cells.

    Heuristic
    ---------
    Most Constrained Variable: the next column is the unassigned one with the
    fewest legal rows, ties broken by the smallest index. Rows are tried in
    ascending order, so results are deterministic.

    Returns ``(None, 0, 0.0)`` without searching when the fixed queens are out
    of bounds, attack each other or sit on a forbidden cell, and
    ``(None, explored, elapsed)`` once every branch has been ruled out.
    """
    _check_size(size)
    fixed_positions = coerce_positions(fixed)
    blocked = frozenset((p.row, p.col) for p in coerce_positions(forbidden))

    if any(not p.in_bounds(size) or (p.row, p.col) in blocked for p in fixed_positions):
        return None, 0, 0.0
    if find_conflicts(fixed_positions):
        return None, 0, 0.0

    board = _Board(size, blocked)
    for p in fixed_positions:
        board.place(p.row, p.col)
    return _search_completion(board, time_limit)
