"""Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import logging
import os
import random
from enum import Enum
from typing import List, Tuple, Optional

from ..core.grid import Grid
from ..core.groups import SIZE
from ..core.validator import has_unique_solution
from ..solvers.selector import CollapseSelector
from ..solvers.wfc_solver import SolveSession

log = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the range of clues for this difficulty (min, max)."""
        ranges = {
            Difficulty.EASY: (36, 45),
            Difficulty.MEDIUM: (28, 35),
            Difficulty.HARD: (22, 27),
            Difficulty.EXPERT: (17, 21),    # 17 is minimum for unique solution
        }
        return ranges[self]


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with various difficulty levels.

    Algorithm:
    1. Collapse an empty grid to a complete solution
    2. Remove cells based on difficulty level
    3. Keep a removal only if the puzzle still has a unique solution
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Grid:
        """
        Generate a Sudoku puzzle with the specified difficulty.

        Returns:
            A Grid holding the clues only.
        """
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[Grid]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Tuple[Grid, Grid]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution) grids.
        """
        solution = self._generate_complete_grid()
        puzzle = self._remove_cells(solution, difficulty)
        return puzzle, solution

    def _generate_complete_grid(self) -> Grid:
        """Collapse an empty grid with this generator's random source."""
        session = SolveSession(Grid(), selector=CollapseSelector(rng=self.rng))
        return session.run()

    def _remove_cells(self, solution: Grid, difficulty: Difficulty) -> Grid:
        """
        Remove cells from a complete solution to create a puzzle.

        Ensures the resulting puzzle has a unique solution.
        """
        values = solution.values.copy()
        min_clues, max_clues = difficulty.clue_range

        target_clues = self.rng.randint(min_clues, max_clues)
        cells_to_remove = SIZE * SIZE - target_clues

        filled_cells = [(i, j) for i in range(SIZE) for j in range(SIZE)]
        self.rng.shuffle(filled_cells)

        removed = 0
        for row, col in filled_cells:  # Try each cell at most once
            if removed >= cells_to_remove:
                break

            original_value = values[row, col]
            values[row, col] = 0

            if has_unique_solution(Grid(values)):
                removed += 1
            else:
                values[row, col] = original_value

        log.debug("Generated %s puzzle with %d clues", difficulty.value, SIZE * SIZE - removed)
        return Grid(values)

    @staticmethod
    def save_to_folder(puzzles: List[Grid], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Each file holds nine lines of digits ('0' for blanks) so it can be
        fed back to the CLI.
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            flat = puzzle.to_string()
            with open(file_path, "w") as f:
                for row in range(SIZE):
                    f.write(flat[row * SIZE:(row + 1) * SIZE] + "\n")
