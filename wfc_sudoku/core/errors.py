"""Exception types raised by the solver core."""

from __future__ import annotations
from typing import Optional, Tuple


class SudokuError(Exception):
    """Base class for all errors raised by this package."""


class FormatError(SudokuError, ValueError):
    """Malformed puzzle text (wrong row/column count or a bad character)."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            location = f"line {line}" if column is None else f"line {line}, column {column}"
            message = f"{location}: {message}"
        super().__init__(message)
        self.line = line
        self.column = column


class ConflictError(SudokuError):
    """A cell was fixed to a digit outside its candidate set."""


class Contradiction(SudokuError):
    """
    A cell ran out of candidates, or a digit appeared twice in a group.

    Raised by propagation and consumed by the solve session to drive
    backtracking.
    """

    def __init__(self, at: Tuple[int, int], digit: Optional[int] = None):
        row, col = at
        if digit is None:
            message = f"no candidates left at ({row}, {col})"
        else:
            message = f"digit {digit} repeated at ({row}, {col})"
        super().__init__(message)
        self.at = at
        self.digit = digit


class UnsolvableError(SudokuError):
    """Every choice point was exhausted: the puzzle has no valid completion."""


class StepLimitExceeded(SudokuError, RuntimeError):
    """A solve ran out of its step budget while still running."""


class SolveTimeout(SudokuError, TimeoutError):
    """A solve ran past its time limit while still running."""
