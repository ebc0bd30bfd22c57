"""Unit tests for validation utilities."""

from wfc_sudoku.core.grid import Grid
from wfc_sudoku.core.validator import (
    count_solutions,
    has_unique_solution,
    is_consistent,
    is_valid_group,
    is_valid_solution,
    respects_givens,
    validate_solution,
)

from conftest import TEST_PUZZLE, TEST_SOLUTION


def _swap(flat: str, i: int, j: int) -> str:
    chars = list(flat)
    chars[i], chars[j] = chars[j], chars[i]
    return "".join(chars)


class TestValidator:
    """Tests for group and grid validation."""

    def test_valid_group(self):
        """Zeros are ignored, repeated digits are not."""
        assert is_valid_group([1, 2, 0, 0, 5])
        assert not is_valid_group([1, 2, 0, 2])

    def test_solution_is_valid(self):
        """The known solution is a permutation in every group."""
        assert is_valid_solution(Grid.from_string(TEST_SOLUTION))

    def test_incomplete_grid_is_not_a_solution(self):
        """Superposed cells mean not solved."""
        assert not is_valid_solution(Grid.from_string(TEST_PUZZLE))

    def test_swapped_cells_break_columns(self):
        """Swapping two cells of a row keeps rows valid but breaks columns."""
        broken = Grid.from_string(_swap(TEST_SOLUTION, 0, 1))
        assert broken.is_solved()
        assert not is_valid_solution(broken)
        assert not is_consistent(broken)

    def test_consistent_puzzle(self):
        """A puzzle without duplicates is consistent."""
        assert is_consistent(Grid.from_string(TEST_PUZZLE))
        assert not is_consistent(Grid.from_string("55" + "0" * 79))

    def test_box_duplicates_detected(self):
        """Duplicates in a box, but not in a row or column, are found."""
        puzzle = "1" + "0" * 9 + "1" + "0" * 70
        assert not is_consistent(Grid.from_string(puzzle))

    def test_validate_solution(self):
        """Solutions must keep the puzzle's givens."""
        puzzle = Grid.from_string(TEST_PUZZLE)
        solution = Grid.from_string(TEST_SOLUTION)
        assert respects_givens(puzzle, solution)
        assert validate_solution(puzzle, solution)

        other = Grid.from_string("5" + "0" * 80)
        assert not validate_solution(Grid.from_string("6" + "0" * 80), solution)
        assert validate_solution(other, solution)


class TestCountSolutions:
    """Tests for solution counting."""

    def test_unique_puzzle(self):
        """The classic puzzle has exactly one solution."""
        grid = Grid.from_string(TEST_PUZZLE)
        assert count_solutions(grid) == 1
        assert has_unique_solution(grid)

    def test_stops_at_limit(self):
        """An empty grid has many solutions; counting stops at the limit."""
        assert count_solutions(Grid(), limit=2) == 2
        assert not has_unique_solution(Grid())

    def test_contradictory_puzzle(self):
        """Duplicate givens have no solution."""
        assert count_solutions(Grid.from_string("55" + "0" * 79)) == 0

    def test_input_not_modified(self):
        """Counting works on a copy."""
        grid = Grid.from_string(TEST_PUZZLE)
        count_solutions(grid)
        assert grid == Grid.from_string(TEST_PUZZLE)
