"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator, Difficulty

__all__ = ["SudokuGenerator", "Difficulty"]
