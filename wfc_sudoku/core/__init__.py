"""Core module for the superposed Sudoku grid, its groups and validation."""

from .errors import (
    SudokuError,
    FormatError,
    ConflictError,
    Contradiction,
    UnsolvableError,
    StepLimitExceeded,
    SolveTimeout,
)
from .grid import Cell, Grid
from .groups import peers_of, GROUPS
from .parser import parse_grid, load_grid
from .validator import is_consistent, is_valid_solution, has_unique_solution

__all__ = [
    "SudokuError",
    "FormatError",
    "ConflictError",
    "Contradiction",
    "UnsolvableError",
    "StepLimitExceeded",
    "SolveTimeout",
    "Cell",
    "Grid",
    "peers_of",
    "GROUPS",
    "parse_grid",
    "load_grid",
    "is_consistent",
    "is_valid_solution",
    "has_unique_solution",
]
