"""Unit tests for the superposed grid."""

import numpy as np
import pytest

from wfc_sudoku.core.errors import ConflictError
from wfc_sudoku.core.grid import Cell, Grid

from conftest import TEST_PUZZLE


class TestGrid:
    """Tests for Grid class."""

    def test_create_empty_grid(self):
        """An empty grid is fully superposed."""
        grid = Grid()
        assert grid.count_fixed() == 0
        assert grid.count_superposed() == 81
        assert grid.candidates(4, 4) == set(range(1, 10))
        assert not grid.is_solved()

    def test_givens_are_fixed(self):
        """Non-zero input values become fixed givens."""
        grid = Grid.from_string(TEST_PUZZLE)
        cell = grid.get(0, 0)
        assert cell == Cell(digit=5, candidates=frozenset({5}), given=True)
        assert cell.is_fixed
        assert grid.is_given(0, 0)
        assert grid.count_fixed() == 30

    def test_blank_cell_view(self):
        """Blank cells start superposed over every digit."""
        grid = Grid.from_string(TEST_PUZZLE)
        cell = grid.get(0, 2)
        assert cell.digit is None
        assert not cell.is_fixed
        assert not cell.given
        assert cell.entropy == 9

    def test_invalid_shape(self):
        """Only 9x9 grids are accepted."""
        with pytest.raises(ValueError):
            Grid(np.zeros((4, 4), dtype=np.int8))

    def test_invalid_value(self):
        """Values outside 0-9 are rejected."""
        values = np.zeros((9, 9), dtype=np.int8)
        values[0, 0] = 12
        with pytest.raises(ValueError):
            Grid(values)

    def test_set_fixed(self):
        """Fixing a cell collapses it to one digit without touching peers."""
        grid = Grid()
        grid.set_fixed(0, 0, 5)
        assert grid.get(0, 0).digit == 5
        assert grid.candidates(0, 0) == {5}
        assert not grid.is_given(0, 0)
        # No propagation
        assert 5 in grid.candidates(0, 1)

    def test_set_fixed_same_digit_is_noop(self):
        """Fixing a cell again to the same digit is allowed."""
        grid = Grid()
        grid.set_fixed(3, 3, 7)
        grid.set_fixed(3, 3, 7)
        assert grid.get(3, 3).digit == 7

    def test_set_fixed_other_digit_conflicts(self):
        """A fixed cell cannot be changed to another digit."""
        grid = Grid()
        grid.set_fixed(3, 3, 7)
        with pytest.raises(ConflictError):
            grid.set_fixed(3, 3, 8)

    def test_set_fixed_outside_candidates_conflicts(self):
        """Only a remaining candidate can be fixed."""
        grid = Grid()
        grid.remove_candidate(1, 1, 4)
        with pytest.raises(ConflictError):
            grid.set_fixed(1, 1, 4)

    @pytest.mark.parametrize("digit", [0, 10, -1])
    def test_set_fixed_out_of_range_conflicts(self, digit):
        """A digit outside 1-9 is never a candidate."""
        grid = Grid()
        with pytest.raises(ConflictError):
            grid.set_fixed(0, 0, digit)
        assert not grid.is_fixed(0, 0)
        assert grid.candidates(0, 0) == set(range(1, 10))

    def test_remove_candidate(self):
        """Removing candidates reports how many are left."""
        grid = Grid()
        assert grid.remove_candidate(2, 2, 1) == 8
        assert grid.remove_candidate(2, 2, 1) == 8
        assert grid.remove_candidate(2, 2, 9) == 7
        assert grid.candidates(2, 2) == {2, 3, 4, 5, 6, 7, 8}
        assert grid.entropy()[2, 2] == 7

    def test_superposed_cells_row_major(self):
        """Unfixed cells are listed in row-major order."""
        grid = Grid.from_string("1" + "0" * 80)
        cells = list(grid.superposed_cells())
        assert len(cells) == 80
        assert cells[0] == (0, 1)
        assert cells[-1] == (8, 8)

    def test_copy(self):
        """Copies are independent."""
        grid = Grid()
        grid.set_fixed(4, 4, 7)
        copy = grid.copy()

        assert copy == grid
        copy.remove_candidate(0, 0, 1)
        assert grid.candidates(0, 0) == set(range(1, 10))
        assert copy != grid

    def test_givens_only(self):
        """Reset keeps the givens and drops solver-fixed cells."""
        grid = Grid.from_string(TEST_PUZZLE)
        grid.set_fixed(0, 2, 4)
        grid.remove_candidate(0, 3, 6)

        fresh = grid.givens_only()
        assert fresh == Grid.from_string(TEST_PUZZLE)
        assert fresh.get(0, 2).digit is None

    def test_to_string(self):
        """Compact form uses 0 for superposed cells."""
        grid = Grid.from_string(TEST_PUZZLE)
        assert grid.to_string() == TEST_PUZZLE

    def test_from_2d_list(self):
        """Grids can be built from nested lists."""
        data = [[0] * 9 for _ in range(9)]
        data[8][8] = 9
        grid = Grid.from_2d_list(data)
        assert grid.get(8, 8).digit == 9

    def test_pretty_print(self):
        """The board prints with box separators."""
        text = str(Grid.from_string(TEST_PUZZLE))
        lines = text.splitlines()
        assert len(lines) == 13
        assert lines[0].startswith("+")
        assert lines[1] == "| 5 3 . | . 7 . | . . . |"
