"""Sudoku solver based on wave function collapse with snapshot backtracking."""

from .core import (
    Cell,
    Grid,
    SudokuError,
    FormatError,
    ConflictError,
    Contradiction,
    UnsolvableError,
    StepLimitExceeded,
    SolveTimeout,
    parse_grid,
    load_grid,
)
from .solvers import (
    WFCSolver,
    SolveSession,
    SolverState,
    SolverStats,
    Outcome,
    StepResult,
    CollapseSelector,
)
from .config import SolverConfig

__version__ = "1.0.0"

__all__ = [
    "Cell",
    "Grid",
    "SudokuError",
    "FormatError",
    "ConflictError",
    "Contradiction",
    "UnsolvableError",
    "StepLimitExceeded",
    "SolveTimeout",
    "parse_grid",
    "load_grid",
    "WFCSolver",
    "SolveSession",
    "SolverState",
    "SolverStats",
    "Outcome",
    "StepResult",
    "CollapseSelector",
    "SolverConfig",
]
