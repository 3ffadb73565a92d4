"""Authoritative validation of client submissions.

A client can always claim it solved a board, so anything that is about to
be persisted as "solved" (a finished game, a daily challenge, a published
puzzle) is re-checked here from the raw request payload. Client-side flags
such as ``solved: true`` are never trusted.

Payloads use the camelCase keys the web client sends (``boardSize``,
``solution``, ``timeTaken``, ``movesUsed``, ``hintsUsed``). Every rejection
is a ``QueensError`` subclass carrying ``status_code = 400``.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .board import calculate_score
from .conflicts import DIAGONAL, conflicting_pairs, find_conflicts
from .errors import (
    InvalidPuzzleError,
    InvalidSolutionError,
    PlacementError,
    QueensError,
    RuleViolationError,
)
from .position import Position

MIN_PUZZLE_SIZE = 4
MAX_PUZZLE_SIZE = 20
MAX_TITLE_LENGTH = 100
DIFFICULTIES = ("easy", "medium", "hard", "expert")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_duration(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value) and value >= 0


def _read_count(payload: Mapping[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = payload.get(key, default)
    if value is None:
        return None
    if not _is_int(value) or value < 0:
        raise QueensError(f"{key} must be a non-negative integer", reason="malformed")
    return value


def _parse_entry(entry: Any, index: int, board_size: Optional[int]) -> Position:
    if isinstance(entry, Mapping):
        if "row" not in entry or "col" not in entry:
            raise PlacementError(f"Position {index} must have 'row' and 'col'", index)
        row, col = entry["row"], entry["col"]
    elif isinstance(entry, Sequence) and not isinstance(entry, str) and len(entry) == 2:
        row, col = entry[0], entry[1]
    else:
        raise PlacementError(f"Position {index} must be an object or a [row, col] pair", index)

    if not _is_int(row) or not _is_int(col):
        raise PlacementError(f"Position {index} coordinates must be integers", index)
    if row < 0 or col < 0:
        raise PlacementError(f"Position {index} coordinates must not be negative", index)
    if board_size is not None and (row >= board_size or col >= board_size):
        raise PlacementError(f"Position {index} is outside the {board_size}x{board_size} board", index)
    return Position(row, col)


def parse_placements(raw: Any, board_size: Optional[int] = None) -> List[Position]:
    """Validate a raw list of positions at the request boundary.

    Accepts ``{"row": r, "col": c}`` objects and ``[r, c]`` pairs. Booleans,
    floats, strings and negative numbers are rejected; when ``board_size`` is
    given, coordinates must also be smaller than it.
    """
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise PlacementError("Placements must be a list of positions")
    return [_parse_entry(entry, index, board_size) for index, entry in enumerate(raw)]


@dataclass(frozen=True)
class ChallengeRules:
    """Limits a challenge puts on an otherwise valid solution."""

    board_size: int
    time_limit: Optional[float] = None
    move_limit: Optional[int] = None
    hints_allowed: bool = True

    def __post_init__(self) -> None:
        if not _is_int(self.board_size) or self.board_size < 1:
            raise ValueError("board_size must be a positive integer")
        if self.time_limit is not None and not (_is_duration(self.time_limit) and self.time_limit > 0):
            raise ValueError("time_limit must be a positive number when set")
        if self.move_limit is not None and self.move_limit <= 0:
            raise ValueError("move_limit must be positive when set")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChallengeRules":
        # Zero limits mean "no limit" in stored challenges.
        return cls(
            board_size=data.get("boardSize", data.get("board_size", 8)),
            time_limit=data.get("timeLimit", data.get("time_limit")) or None,
            move_limit=data.get("moveLimit", data.get("move_limit")) or None,
            hints_allowed=bool(data.get("hintsAllowed", data.get("hints_allowed", True))),
        )


@dataclass
class VerifiedSolution:
    board_size: int
    placements: List[Position]
    time_taken: Optional[float] = None
    moves_used: Optional[int] = None
    hints_used: int = 0
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "boardSize": self.board_size,
            "solution": [p.to_dict() for p in self.placements],
            "timeTaken": self.time_taken,
            "movesUsed": self.moves_used,
            "hintsUsed": self.hints_used,
            "score": self.score,
        }


def check_solution(placements: Sequence[Position], n: int) -> None:
    """Raise ``InvalidSolutionError`` explaining why ``placements`` is not solved.

    Rejects exactly what ``is_valid_solution`` rejects.
    """
    if not _is_int(n) or n < 1:
        raise InvalidSolutionError("Board size must be a positive integer", reason="malformed")
    if len(placements) != n:
        raise InvalidSolutionError(
            f"Solution must have exactly {n} queens, got {len(placements)}", reason="wrong_count"
        )
    if any(not _is_int(p.row) or not _is_int(p.col) for p in placements):
        raise InvalidSolutionError("Queen coordinates must be integers", reason="malformed")
    outside = [p for p in placements if not p.in_bounds(n)]
    if outside:
        raise InvalidSolutionError(
            f"Solution has queens outside the {n}x{n} board", reason="out_of_bounds", positions=outside
        )
    duplicates = [p for p, count in Counter(placements).items() if count > 1]
    if duplicates:
        raise InvalidSolutionError(
            "Solution places two queens on the same square", reason="duplicate", positions=duplicates
        )
    conflicting = find_conflicts(placements)
    if conflicting:
        raise InvalidSolutionError(
            f"Solution has {len(conflicting)} queens under attack", reason="conflict", positions=conflicting
        )


def verify_submission(payload: Mapping[str, Any], rules: Optional[ChallengeRules] = None) -> VerifiedSolution:
    """Re-check a claimed solution before it is stored as solved.

    Steps
    -----
    1. Read ``boardSize`` (falls back to ``rules.board_size``) and parse the
       ``solution`` list.
    2. Reject anything ``is_valid_solution`` would reject, with a precise
       reason: ``malformed``, ``wrong_count``, ``out_of_bounds``,
       ``duplicate``, ``conflict``.
    3. Apply challenge rules: ``time_limit``, ``move_limit``, ``hints``.
    4. Score the board with ``calculate_score``.
    """
    if not isinstance(payload, Mapping):
        raise QueensError("Submission must be a JSON object", reason="malformed")

    board_size = payload.get("boardSize", rules.board_size if rules else None)
    if not _is_int(board_size) or board_size < 1:
        raise QueensError("boardSize must be a positive integer", reason="malformed")
    if rules is not None and board_size != rules.board_size:
        raise InvalidSolutionError(
            f"Board size {board_size} does not match the challenge ({rules.board_size})", reason="board_size"
        )

    if payload.get("solution") is None:
        raise PlacementError("Missing solution")
    placements = parse_placements(payload["solution"])

    check_solution(placements, board_size)

    time_taken = payload.get("timeTaken")
    if time_taken is not None and not _is_duration(time_taken):
        raise QueensError("timeTaken must be a finite, non-negative number", reason="malformed")
    moves_used = _read_count(payload, "movesUsed")
    hints_used = _read_count(payload, "hintsUsed", 0) or 0

    if rules is not None:
        if rules.time_limit is not None:
            if time_taken is None:
                raise QueensError("timeTaken is required for timed challenges", reason="malformed")
            if time_taken > rules.time_limit:
                raise RuleViolationError("Time limit exceeded", reason="time_limit")
        if rules.move_limit is not None:
            if moves_used is None:
                raise QueensError("movesUsed is required for move-limited challenges", reason="malformed")
            if moves_used > rules.move_limit:
                raise RuleViolationError("Move limit exceeded", reason="move_limit")
        if not rules.hints_allowed and hints_used > 0:
            raise RuleViolationError("Hints not allowed in this challenge", reason="hints")

    return VerifiedSolution(
        board_size=board_size,
        placements=sorted(placements),
        time_taken=time_taken,
        moves_used=moves_used,
        hints_used=hints_used,
        score=calculate_score(board_size, time_taken or 0, hints_used),
    )


@dataclass
class PuzzleDefinition:
    title: str
    board_size: int
    solution: List[Position]
    initial_queens: List[Position] = field(default_factory=list)
    forbidden: List[Position] = field(default_factory=list)
    difficulty: str = "medium"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "boardSize": self.board_size,
            "solution": [p.to_dict() for p in self.solution],
            "initialQueens": [p.to_dict() for p in self.initial_queens],
            "forbiddenSquares": [p.to_dict() for p in self.forbidden],
            "difficulty": self.difficulty,
        }


def _puzzle_positions(definition: Mapping[str, Any], key: str, board_size: int) -> List[Position]:
    try:
        return parse_placements(definition.get(key) or [], board_size)
    except PlacementError as exc:
        raise InvalidPuzzleError(f"{key}: {exc.message}", reason="malformed") from exc


def validate_puzzle(definition: Mapping[str, Any]) -> PuzzleDefinition:
    """Check a user-created puzzle before it is saved or published.

    The stored solution must be a full valid board, every starting queen must
    be part of it (so the puzzle is solvable from its starting position) and
    no solution queen may sit on a forbidden square.
    """
    if not isinstance(definition, Mapping):
        raise InvalidPuzzleError("Puzzle definition must be a JSON object", reason="malformed")
    title = definition.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InvalidPuzzleError("Puzzle title is required", reason="title")
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidPuzzleError(
            f"Puzzle title must be at most {MAX_TITLE_LENGTH} characters", reason="title"
        )

    board_size = definition.get("boardSize")
    if not _is_int(board_size) or not MIN_PUZZLE_SIZE <= board_size <= MAX_PUZZLE_SIZE:
        raise InvalidPuzzleError(
            f"boardSize must be an integer between {MIN_PUZZLE_SIZE} and {MAX_PUZZLE_SIZE}",
            reason="board_size",
        )

    difficulty = definition.get("difficulty", "medium")
    if difficulty not in DIFFICULTIES:
        raise InvalidPuzzleError(
            "difficulty must be one of: " + ", ".join(DIFFICULTIES), reason="difficulty"
        )

    solution = _puzzle_positions(definition, "solution", board_size)
    initial_queens = _puzzle_positions(definition, "initialQueens", board_size)
    forbidden = _puzzle_positions(definition, "forbiddenSquares", board_size)

    if len(solution) != board_size:
        raise InvalidPuzzleError(f"Solution must have exactly {board_size} queens", reason="wrong_count")
    if len(set(solution)) != len(solution):
        raise InvalidPuzzleError("Solution places two queens on the same square", reason="duplicate")

    pairs = conflicting_pairs(solution)
    if pairs:
        attacked = {p for pair in pairs for p in (pair.first, pair.second)}
        if pairs[0].kind == DIAGONAL:
            message = "Solution has conflicting queens on the same diagonal"
        else:
            message = "Solution has conflicting queens in the same row or column"
        raise InvalidPuzzleError(message, reason="conflict", positions=attacked)

    in_solution = set(solution)
    stray = [p for p in initial_queens if p not in in_solution]
    if stray:
        raise InvalidPuzzleError(
            "Starting queens must be part of the solution", reason="initial_queens", positions=stray
        )
    blocked = [p for p in forbidden if p in in_solution]
    if blocked:
        raise InvalidPuzzleError(
            "Solution uses a forbidden square", reason="forbidden", positions=blocked
        )

    return PuzzleDefinition(
        title=title,
        board_size=board_size,
        solution=sorted(solution),
        initial_queens=sorted(set(initial_queens)),
        forbidden=sorted(set(forbidden)),
        difficulty=difficulty,
    )
