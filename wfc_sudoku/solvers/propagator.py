"""Constraint propagation: eliminate a fixed digit from every peer."""

from __future__ import annotations
import logging
from typing import List, Tuple

from ..core.errors import Contradiction
from ..core.grid import Grid
from ..core.groups import PEERS

log = logging.getLogger(__name__)


def propagate(
    grid: Grid,
    row: int,
    col: int,
    digit: int,
    auto_fix_singles: bool = False,
) -> int:
    """
    Remove ``digit`` from the candidates of every peer of (row, col).

    With ``auto_fix_singles``, a peer left with a single candidate is fixed
    to it and propagated in turn (naked singles). The grid is mutated in
    place and is not rolled back on failure.

    Returns:
        Number of cells fixed by naked-single propagation.

    Raises:
        Contradiction: if a peer is already fixed to the same digit, or a
                       peer runs out of candidates.
    """
    pending: List[Tuple[int, int, int]] = [(row, col, digit)]
    auto_fixed = 0

    while pending:
        r, c, d = pending.pop()
        for pr, pc in PEERS[(r, c)]:
            peer_value = grid.values[pr, pc]
            if peer_value == d:
                raise Contradiction((pr, pc), digit=d)
            if peer_value != 0 or not grid.mask[pr, pc, d - 1]:
                continue

            remaining = grid.remove_candidate(pr, pc, d)
            if remaining == 0:
                raise Contradiction((pr, pc))
            if remaining == 1 and auto_fix_singles:
                (single,) = grid.candidates(pr, pc)
                grid.set_fixed(pr, pc, single)
                pending.append((pr, pc, single))
                auto_fixed += 1

    return auto_fixed


def propagate_all(grid: Grid, auto_fix_singles: bool = False) -> int:
    """
    Propagate every fixed cell of the grid (initial propagation of givens).

    Raises:
        Contradiction: on duplicate digits in a group, or when the givens
                       leave a cell without candidates.
    """
    auto_fixed = 0
    for row in range(grid.values.shape[0]):
        for col in range(grid.values.shape[1]):
            digit = int(grid.values[row, col])
            if digit:
                auto_fixed += propagate(grid, row, col, digit, auto_fix_singles)
    log.debug("Initial propagation done, %d cells fixed by singles", auto_fixed)
    return auto_fixed
