import json
import unittest

from queenscheck.errors import (
    InvalidPuzzleError,
    InvalidSolutionError,
    PlacementError,
    QueensError,
    RuleViolationError,
)
from queenscheck.position import Position
from queenscheck.submission import (
    ChallengeRules,
    check_solution,
    parse_placements,
    validate_puzzle,
    verify_submission,
)

FOUR = [{"row": 0, "col": 1}, {"row": 1, "col": 3}, {"row": 2, "col": 0}, {"row": 3, "col": 2}]


class ParsePlacementsTests(unittest.TestCase):
    def test_objects_and_pairs(self) -> None:
        self.assertEqual(
            parse_placements([{"row": 0, "col": 1}, [2, 3]]),
            [Position(0, 1), Position(2, 3)],
        )
        self.assertEqual(parse_placements([]), [])

    def test_rejects_non_list_containers(self) -> None:
        for raw in ("0-1", {"row": 0, "col": 1}, None, 5):
            with self.assertRaises(PlacementError):
                parse_placements(raw)

    def test_rejects_bad_entries(self) -> None:
        for entry in ({"row": 0}, [1], [1, 2, 3], "0-1", [True, 0], [0.0, 1], ["0", "1"], [-1, 0]):
            with self.assertRaises(PlacementError) as ctx:
                parse_placements([[0, 0], entry])
            self.assertEqual(ctx.exception.index, 1)
            self.assertEqual(ctx.exception.reason, "malformed")

    def test_board_size_bound(self) -> None:
        self.assertEqual(parse_placements([[3, 3]], board_size=4), [Position(3, 3)])
        with self.assertRaises(PlacementError):
            parse_placements([[4, 0]], board_size=4)


class CheckSolutionTests(unittest.TestCase):
    def assertReason(self, placements, n, reason):
        with self.assertRaises(InvalidSolutionError) as ctx:
            check_solution(placements, n)
        self.assertEqual(ctx.exception.reason, reason)
        return ctx.exception

    def test_valid_solution_passes(self) -> None:
        check_solution(parse_placements(FOUR), 4)

    def test_reasons(self) -> None:
        self.assertReason([Position(0, 1)], 4, "wrong_count")
        self.assertReason([Position(0, 1), Position(1, 3), Position(2, 0), Position(3, 4)], 4, "out_of_bounds")
        self.assertReason([Position(0, 1), Position(0, 1), Position(2, 0), Position(3, 2)], 4, "duplicate")
        error = self.assertReason(
            [Position(0, 0), Position(1, 1), Position(2, 3), Position(3, 2)], 4, "conflict"
        )
        self.assertIn(Position(0, 0), error.positions)

    def test_malformed_inputs(self) -> None:
        self.assertReason([Position(0.5, 0.5)], 1, "malformed")
        self.assertReason([Position(True, 0)], 1, "malformed")
        self.assertReason([], 0, "malformed")


class VerifySubmissionTests(unittest.TestCase):
    def test_valid_submission_is_scored(self) -> None:
        verified = verify_submission({"boardSize": 4, "solution": list(reversed(FOUR)), "timeTaken": 30})
        self.assertEqual(verified.placements, sorted(parse_placements(FOUR)))
        self.assertEqual(verified.score, 1370)
        body = verified.to_dict()
        self.assertTrue(body["success"])
        self.assertEqual(body["solution"], FOUR)

    def test_client_solved_flag_is_ignored(self) -> None:
        with self.assertRaises(InvalidSolutionError):
            verify_submission({"boardSize": 4, "solution": FOUR[:3], "solved": True})

    def test_malformed_payloads(self) -> None:
        cases = [
            [],
            {"solution": FOUR},
            {"boardSize": "4", "solution": FOUR},
            {"boardSize": 0, "solution": FOUR},
            {"boardSize": 4},
            {"boardSize": 4, "solution": FOUR, "timeTaken": -1},
            {"boardSize": 4, "solution": FOUR, "movesUsed": 1.5},
            {"boardSize": 4, "solution": FOUR, "hintsUsed": -2},
        ]
        for payload in cases:
            with self.assertRaises(QueensError) as ctx:
                verify_submission(payload)
            self.assertEqual(ctx.exception.reason, "malformed", payload)
            self.assertEqual(ctx.exception.status_code, 400)

    def test_non_finite_time_rejected(self) -> None:
        timed = ChallengeRules(board_size=4, time_limit=90)
        for literal in ("NaN", "Infinity", "-Infinity"):
            payload = json.loads('{"boardSize": 4, "solution": %s, "timeTaken": %s}' % (json.dumps(FOUR), literal))
            for rules in (timed, None):
                with self.assertRaises(QueensError) as ctx:
                    verify_submission(payload, rules)
                self.assertEqual(ctx.exception.reason, "malformed", literal)
        with self.assertRaises(ValueError):
            ChallengeRules(board_size=4, time_limit=float("nan"))

    def test_error_body(self) -> None:
        with self.assertRaises(QueensError) as ctx:
            verify_submission({"boardSize": 4, "solution": [[0, 0], [1, 1], [2, 3], [3, 2]]})
        body = ctx.exception.to_dict()
        self.assertFalse(body["success"])
        self.assertEqual(body["reason"], "conflict")
        self.assertIn({"row": 0, "col": 0}, body["conflicts"])

    def test_board_size_from_rules(self) -> None:
        rules = ChallengeRules(board_size=4)
        self.assertEqual(verify_submission({"solution": FOUR}, rules).board_size, 4)
        with self.assertRaises(InvalidSolutionError) as ctx:
            verify_submission({"boardSize": 5, "solution": FOUR}, rules)
        self.assertEqual(ctx.exception.reason, "board_size")

    def test_challenge_limits(self) -> None:
        timed = ChallengeRules(board_size=4, time_limit=60)
        self.assertEqual(verify_submission({"solution": FOUR, "timeTaken": 59.5}, timed).time_taken, 59.5)
        with self.assertRaises(RuleViolationError) as ctx:
            verify_submission({"solution": FOUR, "timeTaken": 61}, timed)
        self.assertEqual(ctx.exception.reason, "time_limit")
        with self.assertRaises(QueensError):
            verify_submission({"solution": FOUR}, timed)

        moves = ChallengeRules(board_size=4, move_limit=4)
        with self.assertRaises(RuleViolationError) as ctx:
            verify_submission({"solution": FOUR, "movesUsed": 5}, moves)
        self.assertEqual(ctx.exception.reason, "move_limit")

        no_hints = ChallengeRules(board_size=4, hints_allowed=False)
        self.assertEqual(verify_submission({"solution": FOUR, "hintsUsed": 0}, no_hints).hints_used, 0)
        with self.assertRaises(RuleViolationError) as ctx:
            verify_submission({"solution": FOUR, "hintsUsed": 1}, no_hints)
        self.assertEqual(ctx.exception.message, "Hints not allowed in this challenge")


class ChallengeRulesTests(unittest.TestCase):
    def test_from_mapping(self) -> None:
        rules = ChallengeRules.from_mapping(
            {"boardSize": 10, "timeLimit": 0, "moveLimit": 12, "hintsAllowed": False}
        )
        self.assertEqual(rules, ChallengeRules(board_size=10, move_limit=12, hints_allowed=False))
        self.assertEqual(ChallengeRules.from_mapping({}).board_size, 8)
        self.assertEqual(ChallengeRules.from_mapping({"time_limit": 90}).time_limit, 90)

    def test_invalid_rules(self) -> None:
        with self.assertRaises(ValueError):
            ChallengeRules(board_size=0)
        with self.assertRaises(ValueError):
            ChallengeRules(board_size=8, time_limit=-5)
        with self.assertRaises(ValueError):
            ChallengeRules(board_size=8, move_limit=-1)


class ValidatePuzzleTests(unittest.TestCase):
    def definition(self, **overrides):
        data = {"title": "Corner start", "boardSize": 4, "solution": FOUR, "difficulty": "easy"}
        data.update(overrides)
        return data

    def assertPuzzleReason(self, definition, reason):
        with self.assertRaises(InvalidPuzzleError) as ctx:
            validate_puzzle(definition)
        self.assertEqual(ctx.exception.reason, reason)
        return ctx.exception

    def test_valid_puzzle(self) -> None:
        puzzle = validate_puzzle(
            self.definition(
                title="  Corner start  ",
                initialQueens=[[0, 1], [0, 1]],
                forbiddenSquares=[{"row": 0, "col": 0}],
            )
        )
        self.assertEqual(puzzle.title, "Corner start")
        self.assertEqual(puzzle.initial_queens, [Position(0, 1)])
        self.assertEqual(puzzle.to_dict()["forbiddenSquares"], [{"row": 0, "col": 0}])
        self.assertEqual(puzzle.to_dict()["solution"], FOUR)

    def test_metadata_rules(self) -> None:
        self.assertPuzzleReason(self.definition(title=" "), "title")
        self.assertPuzzleReason(self.definition(title="x" * 101), "title")
        self.assertPuzzleReason(self.definition(boardSize=3), "board_size")
        self.assertPuzzleReason(self.definition(boardSize=21), "board_size")
        self.assertPuzzleReason(self.definition(difficulty="impossible"), "difficulty")

    def test_solution_rules(self) -> None:
        self.assertPuzzleReason(self.definition(solution=FOUR[:3]), "wrong_count")
        self.assertPuzzleReason(self.definition(solution=FOUR[:3] + [[0, 1]]), "duplicate")
        self.assertPuzzleReason(self.definition(solution=[[0, 1], [1, 3], [2, 0], [4, 2]]), "malformed")

    def test_conflict_messages(self) -> None:
        error = self.assertPuzzleReason(
            self.definition(solution=[[0, 0], [1, 1], [2, 3], [3, 2]]), "conflict"
        )
        self.assertEqual(error.message, "Solution has conflicting queens on the same diagonal")
        error = self.assertPuzzleReason(
            self.definition(solution=[[0, 1], [0, 3], [2, 0], [3, 2]]), "conflict"
        )
        self.assertEqual(error.message, "Solution has conflicting queens in the same row or column")

    def test_non_mapping_definition(self) -> None:
        for definition in (["not", "a", "mapping"], "puzzle", None):
            self.assertPuzzleReason(definition, "malformed")

    def test_start_and_forbidden_squares(self) -> None:
        self.assertPuzzleReason(self.definition(initialQueens=[[0, 0]]), "initial_queens")
        error = self.assertPuzzleReason(self.definition(forbiddenSquares=[[2, 0]]), "forbidden")
        self.assertEqual(error.positions, [Position(2, 0)])


if __name__ == "__main__":
    unittest.main()
