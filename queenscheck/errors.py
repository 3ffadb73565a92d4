"""Exceptions raised at the submission boundary.

All of them are ``ValueError`` subclasses and describe a rejected request.
A web handler can map any ``QueensError`` to ``status_code`` and return
``to_dict()`` as the response body.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .position import Position


class QueensError(ValueError):
    """Base class for rejected placements, solutions and puzzles."""

    status_code = 400

    def __init__(self, message: str, reason: str = "invalid", positions: Iterable[Position] = ()):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.positions: List[Position] = sorted(positions)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": False,
            "message": self.message,
            "reason": self.reason,
        }
        if self.positions:
            payload["conflicts"] = [p.to_dict() for p in self.positions]
        return payload


class PlacementError(QueensError):
    """A placement entry is not a pair of non-negative in-range integers."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message, reason="malformed")
        self.index = index

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.index is not None:
            payload["index"] = self.index
        return payload


class InvalidSolutionError(QueensError):
    """A submitted board is not a solution."""


class RuleViolationError(QueensError):
    """A solution broke the time, move or hint rules of its challenge."""


class InvalidPuzzleError(QueensError):
    """A puzzle definition cannot be published."""
