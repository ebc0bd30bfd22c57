"""Text and image rendering of grids and solver steps."""

from .text import render_grid, render_superposition, render_step

__all__ = ["render_grid", "render_superposition", "render_step"]
