"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, Outcome, SolverStats
from .propagator import propagate, propagate_all
from .selector import CollapseSelector
from .wfc_solver import WFCSolver, SolveSession, SolverState, Snapshot, StepResult

__all__ = [
    "BaseSolver",
    "Outcome",
    "SolverStats",
    "propagate",
    "propagate_all",
    "CollapseSelector",
    "WFCSolver",
    "SolveSession",
    "SolverState",
    "Snapshot",
    "StepResult",
]
