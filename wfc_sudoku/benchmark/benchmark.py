"""Benchmark of WFC configurations across puzzles and random seeds."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from ..core.grid import Grid
from ..generator import SudokuGenerator, Difficulty
from ..solvers import Outcome, SolverStats, WFCSolver

log = logging.getLogger(__name__)

# Counters compared between seeds and between propagation policies
COUNTERS = ["collapses", "backtracks"]


def default_solvers() -> Dict[str, WFCSolver]:
    """Naked-single propagation against plain elimination."""
    return {
        "WFC": WFCSolver(auto_fix_singles=True),
        "WFC-plain": WFCSolver(auto_fix_singles=False),
    }


@dataclass
class BenchmarkResult:
    """One solve of one puzzle by one configuration with one seed."""
    puzzle_id: int
    difficulty: str
    config: str
    auto_fix_singles: bool
    stats: SolverStats

    @property
    def solved(self) -> bool:
        return self.stats.solved

    def to_dict(self) -> Dict[str, Any]:
        row = {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "config": self.config,
            "auto_fix_singles": self.auto_fix_singles,
        }
        row.update(self.stats.to_dict())
        return row


class Benchmark:
    """
    Runs WFC configurations over generated puzzles.

    The collapse order depends on the seed, so each puzzle is solved with
    ``runs_per_puzzle`` consecutive seeds by every configuration. The summary
    reports how much collapses and backtracks spread between seeds of the
    same puzzle, and what auto-fixing singles saves over plain elimination.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, WFCSolver]] = None,
        runs_per_puzzle: int = 3,
        timeout_seconds: Optional[float] = 60.0,
        seed: Optional[int] = None
    ):
        """
        Args:
            puzzles_per_difficulty: Puzzles generated per difficulty.
            difficulties: Difficulties to test (default: all).
            solvers: Configuration name -> solver (default: ``default_solvers()``).
            runs_per_puzzle: Seeds tried per puzzle and configuration.
            timeout_seconds: Time limit of a single solve, checked between steps.
            seed: Seed of the puzzle generator and first solver seed.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.solvers = solvers if solvers is not None else default_solvers()
        self.runs_per_puzzle = runs_per_puzzle
        self.timeout_seconds = timeout_seconds
        self.seed = seed

        self.puzzles: Dict[str, List[Grid]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate the puzzle set, one batch per difficulty."""
        generator = SudokuGenerator(seed=self.seed)
        for difficulty in tqdm(self.difficulties, desc="Generating", disable=not show_progress):
            self.puzzles[difficulty.value] = generator.generate_batch(
                self.puzzles_per_difficulty, difficulty
            )
        log.info("Generated %d puzzles", sum(len(p) for p in self.puzzles.values()))

    def _jobs(self) -> Iterator[Tuple[str, int, Grid, str, int]]:
        first_seed = self.seed or 0
        for difficulty, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for name in self.solvers:
                    for offset in range(self.runs_per_puzzle):
                        yield difficulty, puzzle_id, puzzle, name, first_seed + offset

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Solve every puzzle with every configuration and seed.

        Returns:
            One BenchmarkResult per solve.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        jobs = list(self._jobs())
        self.results = [
            self._run_single(*job)
            for job in tqdm(jobs, desc="Benchmarking", disable=not show_progress)
        ]
        return self.results

    def _run_single(self, difficulty: str, puzzle_id: int, puzzle: Grid,
                    name: str, seed: int) -> BenchmarkResult:
        solver = self.solvers[name]
        solver.seed = seed
        _, stats = solver.solve(puzzle, time_limit=self.timeout_seconds)
        if stats.outcome is Outcome.TIMEOUT:
            log.warning("%s timed out on %s puzzle %d (seed %d) after %d steps",
                        name, difficulty, puzzle_id, seed, stats.steps)
        return BenchmarkResult(puzzle_id, difficulty, name, solver.auto_fix_singles, stats)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per solve."""
        return pd.DataFrame([r.to_dict() for r in self.results])

    def get_summary(self) -> Dict[str, Any]:
        """
        Per-configuration counters and the effect of auto-fixing singles.

        ``seed_std_*`` is the standard deviation of a counter across the seeds
        of one puzzle, averaged over puzzles. ``propagation`` holds, per
        difficulty, the mean collapses and backtracks that plain elimination
        needs beyond auto-fixing.
        """
        summary: Dict[str, Any] = {
            "runs": len(self.results),
            "runs_per_puzzle": self.runs_per_puzzle,
            "difficulties": [d.value for d in self.difficulties],
            "configs": {},
            "propagation": {},
        }
        frame = self.to_dataframe()
        if frame.empty:
            return summary

        for name, group in frame.groupby("config"):
            spread = group.groupby(["difficulty", "puzzle_id"])[COUNTERS].std(ddof=0)
            summary["configs"][name] = {
                "runs": int(len(group)),
                "solved": int(group["solved"].sum()),
                "timeouts": int((group["outcome"] == Outcome.TIMEOUT.value).sum()),
                "mean_collapses": float(group["collapses"].mean()),
                "mean_backtracks": float(group["backtracks"].mean()),
                "max_backtracks": int(group["backtracks"].max()),
                "mean_max_depth": float(group["max_depth"].mean()),
                "seed_std_collapses": float(spread["collapses"].mean()),
                "seed_std_backtracks": float(spread["backtracks"].mean()),
            }

        for difficulty, group in frame.groupby("difficulty"):
            eager = group[group["auto_fix_singles"]]
            plain = group[~group["auto_fix_singles"]]
            if eager.empty or plain.empty:
                continue
            summary["propagation"][difficulty] = {
                f"extra_{counter}": float(plain[counter].mean() - eager[counter].mean())
                for counter in COUNTERS
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Write per-solve rows, the summary and the puzzle files."""
        os.makedirs(output_dir, exist_ok=True)

        self.to_dataframe().to_json(
            os.path.join(output_dir, "benchmark_results.json"), orient="records", indent=2
        )
        with open(os.path.join(output_dir, "benchmark_summary.json"), "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        for difficulty, puzzles in self.puzzles.items():
            folder = os.path.join(output_dir, "puzzles", difficulty)
            SudokuGenerator.save_to_folder(puzzles, folder, prefix=f"puzzle_{difficulty}")

        log.info("Results and puzzles saved to %s", output_dir)
