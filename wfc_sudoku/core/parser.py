"""Parsing of text puzzles into grids."""

from __future__ import annotations
from typing import List

import numpy as np

from .errors import FormatError
from .grid import Grid
from .groups import SIZE

DEFAULT_BLANKS = "0."


def parse_grid(text: str, blank_markers: str = DEFAULT_BLANKS) -> Grid:
    """
    Parse a puzzle into a grid.

    Accepts either nine lines of nine characters, or a single line of 81
    characters. Digits 1-9 are givens, any character in ``blank_markers``
    is an empty cell. Blank lines and surrounding whitespace are ignored.

    Raises:
        FormatError: on a wrong row/column count or an unexpected character.
    """
    numbered = [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), 1)
        if line.strip()
    ]
    compact = len(numbered) == 1 and len(numbered[0][1]) == SIZE * SIZE
    if compact:
        number, line = numbered[0]
        numbered = [
            (number, line[i:i + SIZE]) for i in range(0, SIZE * SIZE, SIZE)
        ]

    if len(numbered) != SIZE:
        raise FormatError(f"expected {SIZE} rows, got {len(numbered)}")

    rows: List[List[int]] = []
    for index, (number, line) in enumerate(numbered):
        if len(line) != SIZE:
            raise FormatError(f"expected {SIZE} cells, got {len(line)}", line=number)
        row = []
        for col, char in enumerate(line):
            if char in blank_markers:
                row.append(0)
            elif char in "123456789":
                row.append(int(char))
            else:
                column = index * SIZE + col + 1 if compact else col + 1
                raise FormatError(f"unexpected character {char!r}", line=number, column=column)
        rows.append(row)

    return Grid(np.array(rows, dtype=np.int8))


def load_grid(path: str, blank_markers: str = DEFAULT_BLANKS) -> Grid:
    """Read and parse a puzzle file."""
    with open(path, "r") as f:
        return parse_grid(f.read(), blank_markers)
