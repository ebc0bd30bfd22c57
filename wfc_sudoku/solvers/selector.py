"""Lowest-entropy cell selection and random candidate choice."""

from __future__ import annotations
import random
from typing import Any, Optional, Set, Tuple

import numpy as np

from ..core.grid import Grid
from ..core.groups import SIZE


class CollapseSelector:
    """
    Picks the next cell to collapse and the digit to collapse it to.

    The cell is the superposed one with the fewest candidates, scanning in
    row-major order so ties always resolve to the first such cell. The digit
    is drawn uniformly from the candidates not yet tried at that point.
    """

    def __init__(self, rng: Optional[Any] = None, seed: Optional[int] = None):
        """
        Args:
            rng: Random source exposing ``choice(sequence)``. Defaults to
                 ``random.Random(seed)``.
            seed: Seed for the default random source.
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def select(self, grid: Grid) -> Optional[Tuple[int, int]]:
        """Lowest-entropy superposed cell, or None if every cell is fixed."""
        entropy = grid.entropy()
        entropy[grid.values != 0] = SIZE + 1
        index = int(np.argmin(entropy))
        row, col = divmod(index, SIZE)
        if entropy[row, col] > SIZE:
            return None
        return row, col

    def choose_candidate(self, untried: Set[int]) -> int:
        if not untried:
            raise ValueError("No untried candidates left to choose from")
        return int(self.rng.choice(sorted(untried)))
