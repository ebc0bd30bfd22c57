"""Plain-text rendering of grids and solver steps."""

from __future__ import annotations
from typing import List

from ..core.grid import Grid
from ..core.groups import SIZE, BOX_SIZE
from ..solvers.wfc_solver import StepResult


def render_grid(grid: Grid) -> str:
    """Compact board, '.' for superposed cells."""
    return str(grid)


def _cell_block(grid: Grid, row: int, col: int) -> List[str]:
    """Three 3-character lines for one cell."""
    cell = grid.get(row, col)
    if cell.is_fixed:
        middle = f"[{cell.digit}]" if cell.given else f" {cell.digit} "
        return ["   ", middle, "   "]
    lines = []
    for band in range(BOX_SIZE):
        digits = range(band * BOX_SIZE + 1, band * BOX_SIZE + BOX_SIZE + 1)
        lines.append(''.join(str(d) if d in cell.candidates else '.' for d in digits))
    return lines


def render_superposition(grid: Grid) -> str:
    """
    Render every cell as a 3x3 block.

    Superposed cells list their remaining candidates in keypad order
    (missing digits shown as '.'); fixed cells show their digit in the
    middle, bracketed when it is a given.
    """
    width = SIZE * 4 + (BOX_SIZE - 1) * 2 - 1
    separator = '-' * width
    out = []
    for row in range(SIZE):
        if row and row % BOX_SIZE == 0:
            out.append(separator)
        blocks = [_cell_block(grid, row, col) for col in range(SIZE)]
        for line in range(BOX_SIZE):
            parts = []
            for col in range(SIZE):
                if col and col % BOX_SIZE == 0:
                    parts.append('|')
                parts.append(blocks[col][line])
            out.append(' '.join(parts))
        if row % BOX_SIZE != BOX_SIZE - 1:
            out.append('')
    return '\n'.join(out)


def render_step(result: StepResult, superposition: bool = True) -> str:
    """Status line for a step followed by the grid."""
    status = f"state: {result.state.value}  depth: {result.depth}"
    if result.cell is not None:
        row, col = result.cell
        action = "backtracked from" if result.backtracked else "collapsed"
        status += f"  {action} ({row}, {col}) = {result.digit}"
    body = render_superposition(result.grid) if superposition else render_grid(result.grid)
    return f"{status}\n{body}"
