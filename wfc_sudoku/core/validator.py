"""Validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

import numpy as np

from .errors import Contradiction
from .groups import SIZE, BOX_SIZE

if TYPE_CHECKING:
    from .grid import Grid

_FULL = np.arange(1, SIZE + 1)


def _group_arrays(values: np.ndarray) -> np.ndarray:
    """Stack the 27 groups of a 9x9 value array into a (27, 9) array."""
    boxes = (
        values.reshape(BOX_SIZE, BOX_SIZE, BOX_SIZE, BOX_SIZE)
        .transpose(0, 2, 1, 3)
        .reshape(SIZE, SIZE)
    )
    return np.concatenate([values, values.T, boxes])


def is_valid_group(values: Iterable[int]) -> bool:
    """True if the fixed (non-zero) digits of a group are all distinct."""
    digits = [int(v) for v in values if v != 0]
    return len(digits) == len(set(digits))


def is_consistent(grid: Grid) -> bool:
    """
    Check that no row, column or box holds the same fixed digit twice.

    Superposed cells are ignored; an incomplete grid can be consistent.
    """
    return all(is_valid_group(group) for group in _group_arrays(grid.values))


def is_valid_solution(grid: Grid) -> bool:
    """
    Check that the grid is fully fixed and every group is a permutation of 1-9.
    """
    if not grid.is_solved():
        return False
    groups = np.sort(_group_arrays(grid.values), axis=1)
    return bool(np.all(groups == _FULL))


def respects_givens(puzzle: Grid, solution: Grid) -> bool:
    """True if every given digit of ``puzzle`` appears unchanged in ``solution``."""
    return bool(np.all(solution.values[puzzle.givens] == puzzle.values[puzzle.givens]))


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Returns:
        True if solution is complete, valid and matches the puzzle clues.
    """
    return respects_givens(puzzle, solution) and is_valid_solution(solution)


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """
    Count the number of completions of a grid (up to limit).

    Uses backtracking over the lowest-entropy cell with propagation after
    every assignment. Stops early once limit is reached.

    Args:
        grid: The puzzle grid.
        limit: Maximum solutions to count before stopping.

    Returns:
        Number of solutions found (up to limit).
    """
    from ..solvers.propagator import propagate, propagate_all
    from ..solvers.selector import CollapseSelector

    selector = CollapseSelector()
    work_grid = grid.copy()
    try:
        propagate_all(work_grid, auto_fix_singles=True)
    except Contradiction:
        return 0

    count = [0]  # Use list to allow modification in nested function

    def backtrack(current: Grid) -> bool:
        """Returns True if limit reached."""
        cell = selector.select(current)
        if cell is None:
            count[0] += 1
            return count[0] >= limit

        row, col = cell
        for digit in sorted(current.candidates(row, col)):
            branch = current.copy()
            try:
                branch.set_fixed(row, col, digit)
                propagate(branch, row, col, digit, auto_fix_singles=True)
            except Contradiction:
                continue
            if backtrack(branch):
                return True

        return False

    backtrack(work_grid)
    return count[0]


def has_unique_solution(grid: Grid) -> bool:
    """
    Check if a puzzle has exactly one solution.

    Args:
        grid: The puzzle grid.

    Returns:
        True if the puzzle has exactly one solution.
    """
    return count_solutions(grid, limit=2) == 1
