"""Quick regression tests for the checker benchmark pipeline."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queenscheck.analysis.cli import run_quick_regression_tests


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_checkers_solver_and_csv_generation(self):
        """Ensure checkers, solver and CSV export succeed for small boards."""
        run_quick_regression_tests()


if __name__ == "__main__":
    unittest.main()
