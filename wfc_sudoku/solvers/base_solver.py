"""Timed solve interface and the counters it reports."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import time
import tracemalloc

from ..core.errors import SolveTimeout, StepLimitExceeded, UnsolvableError
from ..core.grid import Grid


class Outcome(Enum):
    """How a timed solve ended."""
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    STEP_LIMIT = "step_limit"
    TIMEOUT = "timeout"


@dataclass
class SolverStats:
    """Measurements of one solve."""
    algorithm: str = ""
    seed: Optional[int] = None
    outcome: Optional[Outcome] = None
    error: Optional[str] = None

    # Wall time and peak traced allocation
    time_seconds: float = 0.0
    peak_memory_bytes: int = 0

    # Search counters
    steps: int = 0
    collapses: int = 0
    backtracks: int = 0
    auto_fixed: int = 0
    max_depth: int = 0

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-ready form (one row of a benchmark table)."""
        data = asdict(self)
        data["outcome"] = self.outcome.value if self.outcome is not None else None
        data["solved"] = self.solved
        return data


class BaseSolver(ABC):
    """
    A solver whose runs are timed and memory-traced.

    ``solve`` never raises for a puzzle that fails to solve: the way the run
    ended is recorded in ``SolverStats.outcome``.
    """

    name: str = "BaseSolver"

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.stats = SolverStats(algorithm=self.name, seed=seed)

    def solve(self, grid: Grid, time_limit: Optional[float] = None) -> Tuple[Optional[Grid], SolverStats]:
        """
        Solve a copy of ``grid``.

        Args:
            grid: The puzzle. It is not modified.
            time_limit: Seconds after which the search stops (None: no limit).

        Returns:
            Tuple of (solution or None, stats).
        """
        stats = SolverStats(algorithm=self.name, seed=self.seed)
        self.stats = stats
        solution = None

        tracemalloc.start()
        start_time = time.perf_counter()
        try:
            solution = self._solve(grid.copy(), stats, time_limit)
            stats.outcome = Outcome.SOLVED
        except UnsolvableError as e:
            stats.outcome, stats.error = Outcome.UNSOLVABLE, str(e)
        except StepLimitExceeded as e:
            stats.outcome, stats.error = Outcome.STEP_LIMIT, str(e)
        except SolveTimeout as e:
            stats.outcome, stats.error = Outcome.TIMEOUT, str(e)
        finally:
            stats.time_seconds = time.perf_counter() - start_time
            _, stats.peak_memory_bytes = tracemalloc.get_traced_memory()
            tracemalloc.stop()

        return solution, stats

    @abstractmethod
    def _solve(self, grid: Grid, stats: SolverStats, time_limit: Optional[float]) -> Grid:
        """
        Search for a solution, filling the counters of ``stats``.

        Args:
            grid: A copy of the puzzle (can be modified).
            stats: Counters to fill in, even when the search fails.
            time_limit: Seconds allowed, or None.

        Returns:
            The solved grid.

        Raises:
            UnsolvableError, StepLimitExceeded or SolveTimeout.
        """
