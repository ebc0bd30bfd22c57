"""Wave-function-collapse solver with explicit snapshot backtracking."""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Set, Tuple

from .base_solver import BaseSolver, SolverStats
from .propagator import propagate, propagate_all
from .selector import CollapseSelector
from ..core.errors import Contradiction, SolveTimeout, StepLimitExceeded, UnsolvableError
from ..core.grid import Grid
from ..core.validator import is_valid_solution

log = logging.getLogger(__name__)

# Session attributes reported in SolverStats
SESSION_COUNTERS = ("steps", "collapses", "backtracks", "auto_fixed", "max_depth")


class SolverState(Enum):
    """States of a solve session. SOLVED and UNSOLVABLE are terminal."""
    RUNNING = "running"
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"

    @property
    def is_terminal(self) -> bool:
        return self is not SolverState.RUNNING


class Snapshot:
    """
    A choice point: the grid before collapsing ``cell``, and what is left to try.

    The saved grid is private and never handed out; ``restore`` returns a
    fresh copy of it.
    """

    def __init__(self, grid: Grid, cell: Tuple[int, int], untried: Set[int]):
        self._grid = grid.copy()
        self.cell = cell
        self.untried = set(untried)
        self.chosen: Optional[int] = None

    def restore(self) -> Grid:
        return self._grid.copy()


@dataclass(frozen=True)
class StepResult:
    """Outcome of one ``advance`` call, with a copy of the grid to render."""
    state: SolverState
    grid: Grid
    cell: Optional[Tuple[int, int]] = None
    digit: Optional[int] = None
    backtracked: bool = False
    depth: int = 0


class SolveSession:
    """
    Step-by-step solve of one puzzle.

    Each ``advance`` performs one atomic step: collapse the lowest-entropy
    cell to a random untried candidate and propagate it. When propagation
    hits a contradiction the grid is restored from the top snapshot and the
    failed digit is dropped; snapshots with nothing left to try are popped,
    which counts as a failure of the choice made below them. The session
    owns its grid and snapshot stack; callers only ever see copies.
    """

    def __init__(
        self,
        grid: Grid,
        selector: Optional[CollapseSelector] = None,
        auto_fix_singles: bool = True,
        seed: Optional[int] = None,
    ):
        """
        Args:
            grid: The puzzle. It is copied, never modified.
            selector: Cell/candidate selector (default: seeded CollapseSelector).
            auto_fix_singles: Also fix cells reduced to one candidate during
                              propagation.
            seed: Seed for the default selector.
        """
        self.selector = selector if selector is not None else CollapseSelector(seed=seed)
        self.auto_fix_singles = auto_fix_singles
        self._puzzle = grid.copy()
        self._start(self._puzzle.copy())

    def _start(self, grid: Grid) -> None:
        self._grid = grid
        self._stack: List[Snapshot] = []
        self._retry = False
        self.state = SolverState.RUNNING
        self.failure: Optional[Contradiction] = None

        self.steps = 0
        self.collapses = 0
        self.backtracks = 0
        self.auto_fixed = 0
        self.max_depth = 0

        initial = grid.copy()
        try:
            self.auto_fixed = propagate_all(self._grid, self.auto_fix_singles)
        except Contradiction as exc:
            log.info("Puzzle is contradictory before any collapse: %s", exc)
            self.failure = exc
            self._grid = initial
            self.state = SolverState.UNSOLVABLE
            return

        if self._grid.is_solved():
            self._finish()

    @property
    def grid(self) -> Grid:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def depth(self) -> int:
        """Number of open choice points."""
        return len(self._stack)

    def reset(self) -> None:
        """Restart from the given digits only."""
        log.debug("Resetting session")
        self._start(self._puzzle.givens_only())

    def advance(self) -> StepResult:
        """
        Perform one step. After SOLVED or UNSOLVABLE this is a no-op.

        Returns:
            The state reached and a copy of the grid.
        """
        if self.state.is_terminal:
            return StepResult(self.state, self.grid, depth=self.depth)
        cell, digit, backtracked = self._step()
        return StepResult(
            state=self.state,
            grid=self.grid,
            cell=cell,
            digit=digit,
            backtracked=backtracked,
            depth=self.depth,
        )

    def run(self, max_steps: Optional[int] = None, time_limit: Optional[float] = None) -> Grid:
        """
        Advance until a terminal state.

        Args:
            max_steps: Steps allowed in this call (None: unbounded).
            time_limit: Seconds allowed in this call, checked between steps.

        Returns:
            The solved grid.

        Raises:
            UnsolvableError: if the puzzle has no valid completion.
            StepLimitExceeded: if ``max_steps`` steps did not reach a terminal state.
            SolveTimeout: if ``time_limit`` passed before a terminal state.
        """
        deadline = None if time_limit is None else time.perf_counter() + time_limit
        taken = 0
        while not self.state.is_terminal:
            if max_steps is not None and taken >= max_steps:
                raise StepLimitExceeded(f"No terminal state after {max_steps} steps")
            if deadline is not None and time.perf_counter() >= deadline:
                raise SolveTimeout(
                    f"No terminal state after {time_limit:g}s ({taken} steps)"
                )
            self._step()
            taken += 1

        if self.state is SolverState.UNSOLVABLE:
            reason = self.failure if self.failure is not None else "every choice point exhausted"
            raise UnsolvableError(f"Puzzle has no solution: {reason}") from self.failure
        return self.grid

    def _step(self) -> Tuple[Optional[Tuple[int, int]], Optional[int], bool]:
        self.steps += 1

        if not self._retry:
            cell = self.selector.select(self._grid)
            if cell is None:
                self._finish()
                return None, None, False
            self._stack.append(Snapshot(self._grid, cell, self._grid.candidates(*cell)))
            self.max_depth = max(self.max_depth, len(self._stack))

        snapshot = self._stack[-1]
        row, col = snapshot.cell
        digit = self.selector.choose_candidate(snapshot.untried)
        snapshot.chosen = digit
        self._retry = False
        self.collapses += 1

        try:
            self._grid.set_fixed(row, col, digit)
            self.auto_fixed += propagate(self._grid, row, col, digit, self.auto_fix_singles)
        except Contradiction as exc:
            log.debug("Collapsing (%d, %d) to %d failed: %s", row, col, digit, exc)
            self.failure = exc
            self._backtrack()
            return snapshot.cell, digit, True

        log.debug("Collapsed (%d, %d) to %d, depth %d", row, col, digit, len(self._stack))
        return snapshot.cell, digit, False

    def _backtrack(self) -> None:
        """Roll back to the deepest choice point that still has untried digits."""
        while self._stack:
            top = self._stack[-1]
            top.untried.discard(top.chosen)
            self.backtracks += 1
            self._grid = top.restore()
            if top.untried:
                self._retry = True
                return
            self._stack.pop()
            log.debug("Choice point %s exhausted", top.cell)

        log.info("Unsolvable after %d collapses", self.collapses)
        self.state = SolverState.UNSOLVABLE

    def _finish(self) -> None:
        if is_valid_solution(self._grid):
            log.info(
                "Solved after %d collapses and %d backtracks",
                self.collapses, self.backtracks,
            )
            self.state = SolverState.SOLVED
        else:
            self._backtrack()


class WFCSolver(BaseSolver):
    """
    Sudoku solver based on wave function collapse.

    Features:
    - Minimum entropy (fewest candidates) cell selection
    - Uniformly random collapse with an injectable random source
    - Peer elimination, optionally with naked-single propagation
    - Iterative backtracking over a stack of grid snapshots
    """

    name = "WFC"

    def __init__(
        self,
        auto_fix_singles: bool = True,
        seed: Optional[int] = None,
        max_steps: Optional[int] = None,
        rng: Optional[Any] = None,
    ):
        """
        Initialize the WFC solver.

        Args:
            auto_fix_singles: If True, cells reduced to one candidate are fixed
                              during propagation.
            seed: Seed of the random source, reused for every solve.
            max_steps: Give up (StepLimitExceeded) after this many steps.
            rng: Explicit random source; overrides ``seed``.
        """
        super().__init__(seed)
        self.auto_fix_singles = auto_fix_singles
        self.max_steps = max_steps
        self.rng = rng

    def session(self, grid: Grid) -> SolveSession:
        """Start a step-by-step session on ``grid`` with this solver's settings."""
        return SolveSession(
            grid,
            selector=CollapseSelector(rng=self.rng, seed=self.seed),
            auto_fix_singles=self.auto_fix_singles,
        )

    def _solve(self, grid: Grid, stats: SolverStats, time_limit: Optional[float]) -> Grid:
        """Run a session to completion, copying its counters into ``stats``."""
        session = self.session(grid)
        try:
            return session.run(self.max_steps, time_limit)
        finally:
            for counter in SESSION_COUNTERS:
                setattr(stats, counter, getattr(session, counter))
