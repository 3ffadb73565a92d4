from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from config_manager import ConfigManager

from .backtracking import count_solutions, solve_first
from .board import next_hint, render_board
from .conflicts import conflicting_pairs, find_conflicts, is_valid_solution
from .errors import QueensError
from .position import Position
from .submission import ChallengeRules, verify_submission


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("Value must be >= 1.")
    return parsed


def _position(value: str) -> Position:
    try:
        return Position.from_key(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="queenscheck",
        description="N-Queens rules: conflicts, solutions, hints and submission checks.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Report attacking queens on a board.")
    check.add_argument("--size", "-n", type=_positive_int, required=True)
    check.add_argument(
        "queens",
        nargs="*",
        type=_position,
        help="Queen positions as row-col or row,col (0-based).",
    )
    check.add_argument("--json", action="store_true")

    solve = subparsers.add_parser("solve", help="Print the first solution of an N x N board.")
    solve.add_argument("--size", "-n", type=_positive_int, required=True)
    solve.add_argument("--count", action="store_true", help="Also count every solution.")
    solve.add_argument("--time-limit", type=float)
    solve.add_argument("--json", action="store_true")

    hint = subparsers.add_parser("hint", help="Suggest the next safe square.")
    hint.add_argument("--size", "-n", type=_positive_int, required=True)
    hint.add_argument("queens", nargs="*", type=_position)
    hint.add_argument(
        "--locked",
        action="append",
        type=_position,
        help="Square the hint must avoid; repeat the flag for several squares.",
    )
    hint.add_argument("--json", action="store_true")

    verify = subparsers.add_parser("verify", help="Validate a submission JSON file ('-' for stdin).")
    verify.add_argument("file")
    verify.add_argument("--challenge", help="Apply the rules of a challenge preset from the config.")
    verify.add_argument("--config", default="config.json")

    return parser


def _run_check(args: argparse.Namespace) -> int:
    queens: List[Position] = args.queens or []
    conflicting = find_conflicts(queens)
    solved = is_valid_solution(queens, args.size)
    if args.json:
        payload = {
            "size": args.size,
            "solved": solved,
            "conflicts": [p.to_dict() for p in sorted(conflicting)],
            "pairs": [
                {"first": pair.first.to_dict(), "second": pair.second.to_dict(), "kind": pair.kind}
                for pair in conflicting_pairs(queens)
            ],
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(render_board(queens, args.size))
    print()
    print(f"Queens placed: {len(queens)}/{args.size}")
    print(f"Queens under attack: {len(conflicting)}")
    for pair in conflicting_pairs(queens):
        print(f"  {pair.first.key} x {pair.second.key} ({pair.kind})")
    print("Solved!" if solved else "Not solved.")
    return 0


def _run_solve(args: argparse.Namespace) -> int:
    solution, nodes, elapsed = solve_first(args.size, time_limit=args.time_limit)
    total = count_solutions(args.size) if args.count else None
    if args.json:
        payload = {
            "size": args.size,
            "solution": [p.to_dict() for p in sorted(solution)] if solution is not None else None,
            "nodes_explored": nodes,
            "elapsed_seconds": elapsed,
        }
        if total is not None:
            payload["solutions"] = total
        print(json.dumps(payload, indent=2))
        return 0

    if solution is None:
        print(f"No solution found for N={args.size}.")
    else:
        print(render_board(solution, args.size))
    print(f"Nodes explored: {nodes}")
    print(f"Elapsed: {elapsed * 1000:.3f} ms")
    if total is not None:
        print(f"Total solutions: {total}")
    return 0


def _run_hint(args: argparse.Namespace) -> int:
    cell = next_hint(args.queens or [], args.size, locked=args.locked or [])
    if args.json:
        print(json.dumps({"hint": cell.to_dict() if cell is not None else None}))
        return 0
    if cell is None:
        print("No safe square left. Remove a queen and keep exploring!")
    else:
        print(f"Hint: try row {cell.row + 1}, column {cell.col + 1}")
    return 0


def _run_verify(args: argparse.Namespace) -> int:
    payload = _load_json(args.file)
    rules = None
    if args.challenge:
        rules = ChallengeRules.from_mapping(ConfigManager(args.config).get_challenge_preset(args.challenge))
    try:
        verified = verify_submission(payload, rules)
    except QueensError as exc:
        print(json.dumps({"status": exc.status_code, **exc.to_dict()}, indent=2))
        return 1
    print(json.dumps(verified.to_dict(), indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "check":
            return _run_check(args)
        if args.command == "solve":
            return _run_solve(args)
        if args.command == "hint":
            return _run_hint(args)
        if args.command == "verify":
            return _run_verify(args)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(f"Unknown command: {args.command}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
