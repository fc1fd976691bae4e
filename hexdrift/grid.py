"""Tiling the viewport with hexagon cells."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from hexdrift.cells import Cell, make_oscillating, roll_behavior
from hexdrift.config import EngineSettings
from hexdrift.geometry import Point, hex_metrics

LOG = logging.getLogger("hexdrift.grid")


@dataclass
class Grid:
    """A full set of cells plus the tiling parameters that produced them.

    ``span_x``/``span_y`` are the distances a cell moves when it wraps; the
    lattice is periodic with those spans so wrapped cells never collide.
    """

    width: float
    height: float
    hex_size: float
    hex_width: float
    hex_height: float
    vertical_spacing: float
    cols: int = 0
    rows: int = 0
    cells: List[Cell] = field(default_factory=list)

    @property
    def span_x(self) -> float:
        return self.cols * self.hex_width

    @property
    def span_y(self) -> float:
        return self.rows * self.vertical_spacing

    def __len__(self) -> int:
        return len(self.cells)


def grid_shape(width: float, height: float, settings: EngineSettings) -> Tuple[int, int]:
    """Column and row counts covering the viewport plus the recycle allowance."""
    hex_width, hex_height, spacing = hex_metrics(settings.hex_size)
    recycle = settings.recycle_multiple
    cols = math.ceil(width / hex_width) + 2 + recycle
    rows = math.ceil(height / spacing) + 2 + math.ceil(recycle * hex_height / spacing)
    # Even row count: wrapping by span_y must keep each row's half-cell offset.
    if rows % 2:
        rows += 1
    return cols, rows


def assign_highlight_groups(cells: List[Cell], settings: EngineSettings, rng: random.Random) -> int:
    """Tag ~``special_chance * highlight_ratio`` of cells as colored clusters.

    Neighbours are taken in generation order (``seed + 1``, ``seed + 2``),
    which is the same row except at row ends. Returns the number of cells
    tagged.
    """
    total = len(cells)
    seeds = int(round(total * settings.special_chance * settings.highlight_ratio))
    if not total or seeds <= 0:
        return 0
    colors = sorted(settings.highlight_colors)
    used: Set[int] = set()
    tagged = 0
    for _ in range(seeds):
        free = total - len(used)
        if free <= 0:
            break
        idx = rng.randrange(total)
        while idx in used:
            idx = rng.randrange(total)
        color = rng.choice(colors)
        used.add(idx)
        cells[idx].behavior.highlight = color
        make_oscillating(cells[idx].behavior, settings, rng)
        tagged += 1
        for step in range(1, rng.randint(1, 2) + 1):
            n_idx = idx + step
            if n_idx >= total or n_idx in used:
                continue
            used.add(n_idx)
            cells[n_idx].behavior.highlight = color
            make_oscillating(cells[n_idx].behavior, settings, rng)
            tagged += 1
    return tagged


def generate_grid(
    width: float,
    height: float,
    settings: EngineSettings,
    rng: random.Random,
    origin: Point = (0.0, 0.0),
) -> Grid:
    """Build a fresh grid with cell (row 0, col 0) at world ``origin``."""
    hex_width, hex_height, spacing = hex_metrics(settings.hex_size)
    grid = Grid(
        width=width,
        height=height,
        hex_size=settings.hex_size,
        hex_width=hex_width,
        hex_height=hex_height,
        vertical_spacing=spacing,
    )
    if width <= 0 or height <= 0:
        LOG.debug("Viewport %sx%s is empty; generated no cells", width, height)
        return grid

    cols, rows = grid_shape(width, height, settings)
    grid.cols, grid.rows = cols, rows
    for row in range(-1, rows - 1):
        for col in range(-1, cols - 1):
            x = origin[0] + col * hex_width + (row % 2) * (hex_width / 2)
            y = origin[1] + row * spacing
            grid.cells.append(Cell(x, y, roll_behavior(settings, rng)))

    tagged = assign_highlight_groups(grid.cells, settings, rng)
    LOG.debug(
        "Generated %d cells (%dx%d) for %sx%s viewport, %d highlighted",
        len(grid.cells), cols, rows, width, height, tagged,
    )
    return grid


__all__ = ["Grid", "grid_shape", "assign_highlight_groups", "generate_grid"]
