"""Unit tests for constraint propagation."""

import pytest

from wfc_sudoku.core.errors import Contradiction
from wfc_sudoku.core.grid import Grid
from wfc_sudoku.core.groups import PEERS
from wfc_sudoku.solvers.propagator import propagate, propagate_all

from conftest import TEST_PUZZLE, TEST_SOLUTION


class TestPropagate:
    """Tests for propagate."""

    def test_removes_digit_from_peers(self):
        """The fixed digit disappears from all 20 peers and nowhere else."""
        grid = Grid()
        grid.set_fixed(4, 4, 5)
        assert propagate(grid, 4, 4, 5) == 0

        for peer in PEERS[(4, 4)]:
            assert 5 not in grid.candidates(*peer)
        assert 5 in grid.candidates(0, 0)
        assert grid.candidates(4, 4) == {5}

    def test_duplicate_digit_is_contradiction(self):
        """A peer fixed to the same digit fails."""
        grid = Grid.from_string("55" + "0" * 79)
        with pytest.raises(Contradiction) as info:
            propagate(grid, 0, 0, 5)
        assert info.value.at == (0, 1)
        assert info.value.digit == 5

    def test_emptied_cell_is_contradiction(self):
        """A peer left without candidates fails."""
        grid = Grid()
        for digit in range(1, 10):
            if digit != 3:
                grid.remove_candidate(0, 1, digit)
        grid.set_fixed(0, 0, 3)

        with pytest.raises(Contradiction) as info:
            propagate(grid, 0, 0, 3)
        assert info.value.at == (0, 1)
        assert info.value.digit is None

    def test_single_left_without_auto_fix(self):
        """Without auto-fix a single candidate stays superposed."""
        grid = Grid.from_string("123456780" + "0" * 72)
        assert propagate_all(grid) == 0
        assert grid.candidates(0, 8) == {9}
        assert not grid.is_fixed(0, 8)

    def test_single_left_with_auto_fix(self):
        """With auto-fix a single candidate is fixed and propagated."""
        grid = Grid.from_string("123456780" + "0" * 72)
        assert propagate_all(grid, auto_fix_singles=True) == 1
        assert grid.get(0, 8).digit == 9
        assert 9 not in grid.candidates(8, 8)

    def test_auto_fix_cascade_detects_contradiction(self):
        """Contradictions found while auto-fixing are raised."""
        puzzle = (
            "123456700"
            "000000000"
            "000000000"
            "000000090"
            "000000000"
            "000000000"
            "000000009"
            "000000000"
            "000000000"
        )
        with pytest.raises(Contradiction):
            propagate_all(Grid.from_string(puzzle), auto_fix_singles=True)

    def test_auto_fix_only_fixes_forced_cells(self):
        """Every cell fixed by naked singles agrees with the unique solution."""
        grid = Grid.from_string(TEST_PUZZLE)
        fixed = propagate_all(grid, auto_fix_singles=True)
        assert fixed > 0
        assert grid.get(4, 4).digit == 5
        for index, char in enumerate(grid.to_string()):
            if char != "0":
                assert char == TEST_SOLUTION[index]

    def test_duplicate_givens_fail_initial_propagation(self):
        """Two equal digits in a row fail fast."""
        with pytest.raises(Contradiction):
            propagate_all(Grid.from_string("5" + "0" * 7 + "5" + "0" * 72))
