"""The 27 constraint groups of a 9x9 Sudoku and the derived peer table."""

from __future__ import annotations
from typing import Dict, FrozenSet, Tuple

Coord = Tuple[int, int]

SIZE = 9
BOX_SIZE = 3
DIGITS = tuple(range(1, SIZE + 1))

ROWS: Tuple[Tuple[Coord, ...], ...] = tuple(
    tuple((row, col) for col in range(SIZE)) for row in range(SIZE)
)
COLUMNS: Tuple[Tuple[Coord, ...], ...] = tuple(
    tuple((row, col) for row in range(SIZE)) for col in range(SIZE)
)
BOXES: Tuple[Tuple[Coord, ...], ...] = tuple(
    tuple(
        (box_row + i, box_col + j)
        for i in range(BOX_SIZE)
        for j in range(BOX_SIZE)
    )
    for box_row in range(0, SIZE, BOX_SIZE)
    for box_col in range(0, SIZE, BOX_SIZE)
)
GROUPS = ROWS + COLUMNS + BOXES


def box_index(row: int, col: int) -> int:
    """Index (0-8, row-major) of the box containing (row, col)."""
    _check(row, col)
    return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)


def groups_of(row: int, col: int) -> Tuple[Tuple[Coord, ...], ...]:
    """The row, column and box groups that contain (row, col)."""
    return ROWS[row], COLUMNS[col], BOXES[box_index(row, col)]


def _build_peers() -> Dict[Coord, Tuple[Coord, ...]]:
    table = {}
    for row in range(SIZE):
        for col in range(SIZE):
            members = set()
            for group in groups_of(row, col):
                members.update(group)
            members.discard((row, col))
            table[(row, col)] = tuple(sorted(members))
    return table


def _check(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"Cell ({row}, {col}) is outside the 9x9 grid")


# cell -> the 20 cells sharing a row, column or box with it
PEERS: Dict[Coord, Tuple[Coord, ...]] = _build_peers()


def peers_of(row: int, col: int) -> FrozenSet[Coord]:
    """
    Get all peer cell positions (those in the same row, column, or box).

    Returns:
        The 20 peers of (row, col), excluding the cell itself.
    """
    _check(row, col)
    return frozenset(PEERS[(row, col)])
