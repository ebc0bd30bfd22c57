"""Sudoku grid whose empty cells hold a superposition of candidate digits."""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

import numpy as np

from .errors import ConflictError
from .groups import SIZE, BOX_SIZE


@dataclass(frozen=True)
class Cell:
    """Read-only view of one cell: either fixed to a digit or superposed."""
    digit: Optional[int]
    candidates: FrozenSet[int]
    given: bool = False

    @property
    def is_fixed(self) -> bool:
        return self.digit is not None

    @property
    def entropy(self) -> int:
        """Number of digits the cell can still take."""
        return len(self.candidates)


class Grid:
    """
    A standard 9x9 Sudoku grid.

    Every cell is either Fixed to a digit or Superposed over a set of
    candidate digits. The state lives in three numpy arrays:

    - ``values``: fixed digit per cell, 0 while the cell is superposed.
    - ``mask``: boolean (9, 9, 9) array, ``mask[r, c, d - 1]`` is True while
      digit ``d`` is still a candidate for cell (r, c).
    - ``givens``: True for the cells fixed by the input puzzle.
    """

    def __init__(self, values: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            values: Optional 9x9 array of digits, 0 for empty cells. Non-zero
                    entries become fixed givens, zeros become superposed over
                    every digit. If None, creates an empty grid.
        """
        if values is None:
            values = np.zeros((SIZE, SIZE), dtype=np.int8)
        values = np.asarray(values)
        if values.shape != (SIZE, SIZE):
            raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {values.shape}")
        if values.min() < 0 or values.max() > SIZE:
            raise ValueError(f"Values must be 0-{SIZE}")

        self.values = values.astype(np.int8)
        self.givens = self.values != 0
        self.mask = np.ones((SIZE, SIZE, SIZE), dtype=bool)
        for row, col in zip(*np.nonzero(self.givens)):
            self.mask[row, col, :] = False
            self.mask[row, col, self.values[row, col] - 1] = True

    def copy(self) -> Grid:
        """Create a deep copy of the grid."""
        new_grid = Grid.__new__(Grid)
        new_grid.values = self.values.copy()
        new_grid.givens = self.givens.copy()
        new_grid.mask = self.mask.copy()
        return new_grid

    def givens_only(self) -> Grid:
        """A fresh grid holding only the given digits."""
        return Grid(np.where(self.givens, self.values, 0))

    def get(self, row: int, col: int) -> Cell:
        """Get the cell at (row, col)."""
        digit = int(self.values[row, col])
        return Cell(
            digit=digit or None,
            candidates=frozenset(self.candidates(row, col)),
            given=bool(self.givens[row, col]),
        )

    def candidates(self, row: int, col: int) -> Set[int]:
        """Digits still possible at (row, col). A fixed cell yields its digit."""
        return {int(d) + 1 for d in np.flatnonzero(self.mask[row, col])}

    def is_fixed(self, row: int, col: int) -> bool:
        return self.values[row, col] != 0

    def is_given(self, row: int, col: int) -> bool:
        return bool(self.givens[row, col])

    def set_fixed(self, row: int, col: int, digit: int) -> None:
        """
        Collapse (row, col) to ``digit``. Does not propagate to peers.

        Raises:
            ConflictError: if the digit is not a candidate of the cell, or the
                           cell is already fixed to another digit.
        """
        current = self.values[row, col]
        if current != 0:
            if current == digit:
                return
            raise ConflictError(
                f"Cell ({row}, {col}) is already fixed to {current}, cannot set {digit}"
            )
        if digit not in self.candidates(row, col):
            raise ConflictError(
                f"Digit {digit} is not a candidate of cell ({row}, {col}): "
                f"{sorted(self.candidates(row, col))}"
            )
        self.values[row, col] = digit
        self.mask[row, col, :] = False
        self.mask[row, col, digit - 1] = True

    def remove_candidate(self, row: int, col: int, digit: int) -> int:
        """
        Drop ``digit`` from the candidates of a superposed cell.

        Returns:
            Number of candidates left. May be 0: the caller must treat that
            as a contradiction.
        """
        cell_mask = self.mask[row, col]
        cell_mask[digit - 1] = False
        return int(cell_mask.sum())

    def entropy(self) -> np.ndarray:
        """9x9 array of candidate counts (1 for fixed cells)."""
        return self.mask.sum(axis=2)

    def superposed_cells(self) -> Iterator[Tuple[int, int]]:
        """Positions of the unfixed cells in row-major order."""
        for row, col in zip(*np.nonzero(self.values == 0)):
            yield int(row), int(col)

    def count_fixed(self) -> int:
        return int(np.count_nonzero(self.values))

    def count_superposed(self) -> int:
        return SIZE * SIZE - self.count_fixed()

    def is_solved(self) -> bool:
        """True when every cell is fixed."""
        return self.count_fixed() == SIZE * SIZE

    def to_string(self) -> str:
        """Compact 81-character form, '0' for superposed cells."""
        return ''.join(str(int(v)) for v in self.values.flatten())

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """Create a grid from puzzle text (see ``parser.parse_grid``)."""
        from .parser import parse_grid
        return parse_grid(s)

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> Grid:
        """Create a grid from a 2D list."""
        return cls(np.array(data, dtype=np.int8))

    def __str__(self) -> str:
        """Pretty-print the grid, '.' for superposed cells."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.values[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Grid(fixed={self.count_fixed()}, givens={int(self.givens.sum())})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return (
            np.array_equal(self.values, other.values)
            and np.array_equal(self.mask, other.mask)
        )

    def __hash__(self) -> int:
        return hash(self.to_string())
