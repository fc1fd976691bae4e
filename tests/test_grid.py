"""Tests for grid generation and behavior rolls."""

import math
import random

import pytest

from hexdrift.cells import HOVER, INERT, OSCILLATING, STATIC, Cell, roll_behavior
from hexdrift.config import EngineSettings
from hexdrift.grid import assign_highlight_groups, generate_grid, grid_shape


class TestGridShape:
    def test_known_viewport(self, settings):
        assert grid_shape(300, 300, settings) == (11, 14)

    @pytest.mark.parametrize("width,height", [(1, 1), (299, 451), (1280, 720), (1920, 1080)])
    def test_rows_are_even(self, settings, width, height):
        _cols, rows = grid_shape(width, height, settings)
        assert rows % 2 == 0

    def test_covers_viewport_with_recycle_margin(self, settings):
        width, height = 1280, 720
        grid = generate_grid(width, height, settings, random.Random(0))
        # a wrapped cell lands beyond the far edge of the viewport
        assert grid.span_x - 3 * grid.hex_width >= width
        assert grid.span_y - 3 * grid.hex_height >= height


class TestGenerateGrid:
    def test_cell_count(self, settings, rng):
        grid = generate_grid(300, 300, settings, rng)
        assert (grid.cols, grid.rows) == (11, 14)
        assert len(grid) == 154

    @pytest.mark.parametrize("width,height", [(0, 300), (300, 0), (-10, -10)])
    def test_empty_viewport(self, settings, rng, width, height):
        grid = generate_grid(width, height, settings, rng)
        assert len(grid) == 0
        assert grid.cells == []

    def test_positions_unique_and_offset(self, settings, rng):
        grid = generate_grid(640, 480, settings, rng)
        positions = {(round(c.x, 6), round(c.y, 6)) for c in grid.cells}
        assert len(positions) == len(grid.cells)
        first = grid.cells[0]
        assert first.x == pytest.approx(-grid.hex_width * 0.5)
        assert first.y == pytest.approx(-grid.vertical_spacing)

    def test_origin_shifts_lattice(self, settings):
        base = generate_grid(300, 300, settings, random.Random(4))
        origin = (base.hex_width * 7, base.vertical_spacing * 4)
        moved = generate_grid(300, 300, settings, random.Random(4), origin)
        assert len(moved) == len(base)
        for a, b in zip(base.cells, moved.cells):
            assert b.x == pytest.approx(a.x + origin[0])
            assert b.y == pytest.approx(a.y + origin[1])
            assert b.behavior == a.behavior

    def test_zero_chance_is_all_inert(self, rng):
        settings = EngineSettings(special_chance=0.0)
        grid = generate_grid(800, 600, settings, rng)
        for cell in grid.cells:
            assert cell.behavior.profile == {INERT}
            assert cell.opacity == 0.0
            assert cell.behavior.highlight is None

    def test_full_chance_hovers_everything(self, rng):
        settings = EngineSettings(special_chance=1.0)
        grid = generate_grid(300, 300, settings, rng)
        assert all(HOVER in cell.behavior.profile for cell in grid.cells)

    def test_highlights_oscillate_in_band(self, rng):
        settings = EngineSettings(special_chance=0.1)
        grid = generate_grid(800, 600, settings, rng)
        highlighted = [c for c in grid.cells if c.behavior.highlight is not None]
        assert highlighted
        low, high = settings.oscillation_band
        for cell in highlighted:
            assert cell.behavior.highlight in settings.highlight_colors
            assert OSCILLATING in cell.behavior.profile
            assert low <= cell.opacity <= high

    def test_same_seed_same_grid(self, settings):
        a = generate_grid(500, 400, settings, random.Random(7))
        b = generate_grid(500, 400, settings, random.Random(7))
        assert [(c.x, c.y, c.behavior) for c in a.cells] == [(c.x, c.y, c.behavior) for c in b.cells]


class TestHighlightGroups:
    def test_seed_count(self, rng):
        settings = EngineSettings(special_chance=0.05)
        cells = [Cell(float(i), 0.0) for i in range(200)]
        tagged = assign_highlight_groups(cells, settings, rng)
        # ten seeds, each with one or two neighbours unless the neighbour was taken
        assert 10 <= tagged <= 30
        assert tagged == sum(1 for c in cells if c.behavior.highlight is not None)

    def test_neighbours_past_the_end_are_skipped(self, rng):
        settings = EngineSettings(special_chance=1.0)
        cells = [Cell(0.0, 0.0)]
        assert assign_highlight_groups(cells, settings, rng) == 1
        assert cells[0].behavior.highlight is not None

    def test_never_tags_more_than_available(self, rng):
        settings = EngineSettings(special_chance=1.0)
        cells = [Cell(float(i), 0.0) for i in range(3)]
        assert assign_highlight_groups(cells, settings, rng) == 3

    def test_no_cells(self, settings, rng):
        assert assign_highlight_groups([], settings, rng) == 0


class TestRollBehavior:
    def test_deterministic(self, settings):
        a = [roll_behavior(settings, random.Random(3)) for _ in range(5)]
        b = [roll_behavior(settings, random.Random(3)) for _ in range(5)]
        assert a == b

    def test_zero_chance(self, rng):
        settings = EngineSettings(special_chance=0.0)
        for _ in range(500):
            behavior = roll_behavior(settings, rng, allow_highlight=True)
            assert behavior.profile == {INERT}
            assert behavior.highlight is None

    def test_frequencies_follow_chance(self, rng):
        settings = EngineSettings(special_chance=0.5)
        counts = {HOVER: 0, OSCILLATING: 0, STATIC: 0}
        trials = 4000
        for _ in range(trials):
            profile = roll_behavior(settings, rng).profile
            for kind in counts:
                if kind in profile:
                    counts[kind] += 1
        assert counts[HOVER] / trials == pytest.approx(0.5, abs=0.05)
        assert counts[OSCILLATING] / trials == pytest.approx(0.1, abs=0.03)
        # static is only rolled when the cell did not oscillate
        assert counts[STATIC] / trials == pytest.approx(0.9 * 0.1, abs=0.03)

    def test_static_opacity_in_band(self, rng):
        settings = EngineSettings(special_chance=1.0, oscillating_ratio=0.0, static_ratio=1.0)
        behavior = roll_behavior(settings, rng)
        assert behavior.profile == {STATIC, HOVER}
        low, high = settings.oscillation_band
        assert low <= behavior.opacity <= high
        assert not math.isnan(behavior.opacity)

    def test_recycled_highlight_is_oscillating(self, rng):
        settings = EngineSettings(special_chance=1.0)
        behavior = roll_behavior(settings, rng, allow_highlight=True)
        assert behavior.highlight in settings.highlight_colors
        assert behavior.oscillation is not None
