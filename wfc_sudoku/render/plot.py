"""matplotlib rendering of grids and GIF animation of a solve."""

from __future__ import annotations
import io
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from PIL import Image

from ..core.grid import Grid
from ..core.groups import SIZE, BOX_SIZE
from ..solvers.wfc_solver import SolveSession, StepResult

# Colors for given digits, collapsed cells and superposed cells
COLOR_STATIC = '#1d2021'
COLOR_CERTAIN = '#0083b0'
COLOR_UNCERTAIN = '#518471'
COLOR_HIGHLIGHT = '#ff006e'
COLOR_BACKTRACK = '#e74c3c'


def _candidate_layout(count: int) -> Tuple[int, int]:
    """(columns, rows) used to lay out ``count`` candidates inside a cell."""
    if count >= 7:
        return 3, 3
    if count >= 5:
        return 3, 2
    if count >= 3:
        return 2, 2
    if count == 2:
        return 2, 1
    return 1, 1


def draw_grid(
    ax,
    grid: Grid,
    highlight: Optional[Tuple[int, int]] = None,
    highlight_color: str = COLOR_HIGHLIGHT,
    title: Optional[str] = None,
) -> None:
    """Draw the grid on ``ax``: fixed digits large, candidates small."""
    for row in range(SIZE):
        for col in range(SIZE):
            cell = grid.get(row, col)
            if cell.is_fixed:
                color = COLOR_STATIC if cell.given else COLOR_CERTAIN
                ax.text(col + 0.5, row + 0.5, str(cell.digit), ha='center', va='center',
                        fontsize=18, fontweight='bold', color=color)
                continue

            digits = sorted(cell.candidates)
            cols_amount, rows_amount = _candidate_layout(len(digits))
            fontsize = 14 if len(digits) == 1 else 7
            for i, digit in enumerate(digits):
                x = col + (i % cols_amount + 0.5) / cols_amount
                y = row + (i // cols_amount + 0.5) / rows_amount
                ax.text(x, y, str(digit), ha='center', va='center',
                        fontsize=fontsize, color=COLOR_UNCERTAIN)

    if highlight is not None:
        hr, hc = highlight
        rect = plt.Rectangle((hc, hr), 1, 1, fill=False,
                             edgecolor=highlight_color, linewidth=3)
        ax.add_patch(rect)

    for i in range(SIZE + 1):
        lw = 3 if i % BOX_SIZE == 0 else 0.8
        ax.axhline(i, color=COLOR_STATIC, linewidth=lw)
        ax.axvline(i, color=COLOR_STATIC, linewidth=lw)

    ax.set_xlim(0, SIZE)
    ax.set_ylim(SIZE, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=12, fontweight='bold')


def _step_title(index: int, result: StepResult) -> str:
    if result.cell is None:
        return f"Step {index}: {result.state.value}"
    action = "backtrack" if result.backtracked else "collapse"
    row, col = result.cell
    return f"Step {index}: {action} ({row}, {col}) = {result.digit}"


def step_image(result: StepResult, index: int = 0, dpi: int = 100) -> Image.Image:
    """Render one step to an in-memory image."""
    fig, ax = plt.subplots(figsize=(6, 6), facecolor='white')
    color = COLOR_BACKTRACK if result.backtracked else COLOR_HIGHLIGHT
    draw_grid(ax, result.grid, highlight=result.cell, highlight_color=color,
              title=_step_title(index, result))
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    buf.seek(0)
    return Image.open(buf).convert('RGB')


def save_frame(grid: Grid, path: str, highlight: Optional[Tuple[int, int]] = None,
               title: Optional[str] = None, dpi: int = 100) -> str:
    """Save a single grid picture to ``path``."""
    fig, ax = plt.subplots(figsize=(6, 6), facecolor='white')
    draw_grid(ax, grid, highlight=highlight, title=title)
    plt.tight_layout()
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return path


def record_frames(session: SolveSession, max_steps: Optional[int] = None) -> List[StepResult]:
    """
    Advance ``session`` to a terminal state, keeping every step.

    The first element is the session state before any step.
    """
    frames = [StepResult(session.state, session.grid, depth=session.depth)]
    while not session.state.is_terminal:
        if max_steps is not None and len(frames) > max_steps:
            break
        frames.append(session.advance())
    return frames


def save_animation(frames: List[StepResult], path: str, duration_ms: int = 150,
                   dpi: int = 80) -> str:
    """Assemble recorded steps into an animated GIF."""
    if not frames:
        raise ValueError("No frames to animate")
    images = [step_image(result, index, dpi=dpi) for index, result in enumerate(frames)]

    # Hold first and last frames longer
    if len(images) == 1:
        durations = [2000]
    else:
        durations = [800] + [duration_ms] * (len(images) - 2) + [2000]

    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=durations,
        loop=0,
        optimize=True,
    )
    return path
