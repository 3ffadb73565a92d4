import unittest

from queenscheck.backtracking import complete_placement, count_solutions, iter_solutions, solve_first
from queenscheck.conflicts import is_valid_solution
from queenscheck.position import Position, positions_from_columns


class SolveFirstTests(unittest.TestCase):
    def test_lexicographically_first_solutions(self) -> None:
        solution, nodes, elapsed = solve_first(4)
        self.assertEqual(solution, positions_from_columns([1, 3, 0, 2]))
        self.assertGreater(nodes, 0)
        self.assertGreaterEqual(elapsed, 0.0)

        solution, _, _ = solve_first(8)
        self.assertEqual(solution, positions_from_columns([0, 4, 7, 5, 2, 6, 1, 3]))

    def test_unsolvable_sizes(self) -> None:
        for n in (2, 3):
            solution, nodes, _ = solve_first(n)
            self.assertIsNone(solution)
            self.assertGreater(nodes, 0)

    def test_larger_boards_are_valid(self) -> None:
        for n in (1, 5, 10, 16):
            solution, _, _ = solve_first(n, time_limit=10.0)
            self.assertTrue(is_valid_solution(solution, n), n)

    def test_invalid_size(self) -> None:
        with self.assertRaises(ValueError):
            solve_first(0)
        with self.assertRaises(ValueError):
            list(iter_solutions(-1))
        with self.assertRaises(ValueError):
            complete_placement(0)


class EnumerationTests(unittest.TestCase):
    def test_known_solution_counts(self) -> None:
        self.assertEqual([count_solutions(n) for n in range(1, 9)], [1, 0, 0, 2, 10, 4, 40, 92])

    def test_first_yield_matches_solve_first(self) -> None:
        for n in (4, 6, 8):
            self.assertEqual(next(iter_solutions(n)), solve_first(n)[0])

    def test_solutions_are_distinct(self) -> None:
        solutions = {frozenset(s) for s in iter_solutions(6)}
        self.assertEqual(len(solutions), 4)


class CompletePlacementTests(unittest.TestCase):
    def test_empty_board(self) -> None:
        for n in (1, 4, 8, 12):
            solution, _, _ = complete_placement(n)
            self.assertTrue(is_valid_solution(solution, n), n)

    def test_keeps_fixed_queens(self) -> None:
        fixed = [Position(0, 0), Position(1, 4)]
        solution, _, _ = complete_placement(8, fixed=fixed)
        self.assertTrue(is_valid_solution(solution, 8))
        for queen in fixed:
            self.assertIn(queen, solution)

    def test_accepts_raw_coordinates(self) -> None:
        solution, _, _ = complete_placement(6, fixed=[{"row": 0, "col": 1}], forbidden=["2-2"])
        self.assertIn(Position(0, 1), solution)
        self.assertNotIn(Position(2, 2), solution)
        self.assertTrue(is_valid_solution(solution, 6))

    def test_avoids_forbidden_cells(self) -> None:
        solution, _, _ = complete_placement(4, forbidden=[Position(0, 2)])
        self.assertEqual(sorted(solution), sorted(positions_from_columns([2, 0, 3, 1])))

    def test_no_completion(self) -> None:
        solution, nodes, _ = complete_placement(4, fixed=[Position(0, 0)])
        self.assertIsNone(solution)
        self.assertGreater(nodes, 0)

    def test_exhausted_search_ends_without_time_limit(self) -> None:
        for n in (2, 3):
            solution, nodes, elapsed = complete_placement(n)
            self.assertIsNone(solution, n)
            self.assertGreater(nodes, 0)
            self.assertLess(elapsed, 1.0)
        solution, nodes, elapsed = complete_placement(6, fixed=[Position(0, 0)])
        self.assertIsNone(solution)
        self.assertLess(elapsed, 1.0)

    def test_no_completion_is_cheap(self) -> None:
        _, nodes, _ = complete_placement(4, fixed=[Position(0, 0)], time_limit=3.0)
        self.assertLess(nodes, 100)

    def test_rejected_fixed_queens_skip_the_search(self) -> None:
        for fixed, forbidden in (
            ([Position(0, 0), Position(2, 2)], []),
            ([Position(0, 9)], []),
            ([Position(1, 3)], [Position(1, 3)]),
        ):
            self.assertEqual(complete_placement(8, fixed=fixed, forbidden=forbidden), (None, 0, 0.0))

    def test_full_fixed_board_is_returned(self) -> None:
        full = positions_from_columns([1, 3, 0, 2])
        solution, nodes, _ = complete_placement(4, fixed=full)
        self.assertEqual(sorted(solution), sorted(full))
        self.assertEqual(nodes, 0)


if __name__ == "__main__":
    unittest.main()
