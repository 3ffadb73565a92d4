"""Board coordinates and conversions between board representations.

The game stores queens in several shapes depending on where the data comes
from. This module normalises all of them to ``Position`` values so that the
checkers in ``queenscheck.conflicts`` only ever see one representation.

Representations
---------------
- rows:    ``queens[row] = col`` with ``-1`` for an empty row (game state).
- columns: ``board[col] = row`` (solver output, see ``backtracking``).
- grid:    ``grid[row][col]`` truthy where a queen stands (puzzle screens).
- keys:    ``"row-col"`` strings (persisted puzzles and saves).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence

EMPTY = -1


@dataclass(frozen=True, order=True)
class Position:
    """A single board cell, hashable and ordered row-major."""

    row: int
    col: int

    @property
    def key(self) -> str:
        return f"{self.row}-{self.col}"

    @classmethod
    def from_key(cls, key: str) -> "Position":
        """Parse ``"row-col"`` or ``"row,col"``.

        Negative coordinates are only supported with the comma separator.
        """
        text = key.strip()
        if "," in text:
            row_text, col_text = text.split(",", 1)
        else:
            row_text, sep, col_text = text.partition("-")
            if not sep:
                raise ValueError(f"Malformed position key: {key!r}")
        try:
            return cls(int(row_text), int(col_text))
        except ValueError as exc:
            raise ValueError(f"Malformed position key: {key!r}") from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Position":
        return cls(data["row"], data["col"])

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size


def coerce_position(value: Any) -> Position:
    """Convert a Position, ``(row, col)`` pair, mapping or key string."""
    if isinstance(value, Position):
        return value
    if isinstance(value, str):
        return Position.from_key(value)
    if isinstance(value, Mapping):
        return Position.from_mapping(value)
    if isinstance(value, Sequence) and len(value) == 2:
        return Position(value[0], value[1])
    raise TypeError(f"Cannot interpret {value!r} as a board position")


def coerce_positions(values: Iterable[Any]) -> List[Position]:
    return [coerce_position(value) for value in values]


def positions_from_rows(queens: Sequence[int]) -> List[Position]:
    """``queens[row] = col`` -> positions, skipping empty rows."""
    return [Position(row, col) for row, col in enumerate(queens) if col != EMPTY]


def positions_from_columns(board: Sequence[int]) -> List[Position]:
    """``board[col] = row`` -> positions, skipping unassigned columns."""
    return [Position(row, col) for col, row in enumerate(board) if row != EMPTY]


def positions_from_grid(grid: Sequence[Sequence[Any]]) -> List[Position]:
    """Collect truthy cells of a 2D board in row-major order."""
    return [
        Position(row, col)
        for row, cells in enumerate(grid)
        for col, cell in enumerate(cells)
        if cell
    ]


def positions_to_rows(placements: Iterable[Position], size: int) -> List[int]:
    """Inverse of ``positions_from_rows``; later queens win on a shared row."""
    queens = [EMPTY] * size
    for position in placements:
        if position.in_bounds(size):
            queens[position.row] = position.col
    return queens
