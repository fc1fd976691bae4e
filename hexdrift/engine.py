"""Per-frame animation of the drifting hexagon field.

The engine owns the grid, the pan offset, the simulation clock and the
pointer. Every frame it advances time, wraps cells that fell off the
north-west edge back to the far side, steps each cell's opacity state and
then draws markers and cells onto the mounted surface.

Pan is never applied to cell coordinates. Cells keep world positions that
stay within a few spans of the viewport; the offset grows without bound
and is subtracted at draw time.
"""
from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from hexdrift.cells import Cell, roll_behavior
from hexdrift.colors import clamp, parse_color, with_alpha
from hexdrift.config import EngineSettings
from hexdrift.geometry import Point, hex_metrics, hexagon_vertices, point_in_hexagon
from hexdrift.grid import Grid, generate_grid
from hexdrift.interaction import EventSource, InteractionAdapter
from hexdrift.scheduler import FrameScheduler, FrameTask
from hexdrift.surfaces import DrawingSurface
from hexdrift.wave import marker_drift, ripple_offset, wave

LOG = logging.getLogger("hexdrift.engine")

# Pointer position meaning "nothing hovered".
FAR_AWAY: Point = (-1000.0, -1000.0)
# Rates and eases are tuned per frame at 60 Hz.
BASE_FPS = 60.0
MIN_VISIBLE_ALPHA = 0.01


class HexDriftEngine:
    def __init__(self, settings: Optional[EngineSettings] = None, rng: Optional[random.Random] = None) -> None:
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random()
        self.surface: Optional[DrawingSurface] = None
        self.adapter = InteractionAdapter(self)
        self.task: Optional[FrameTask] = None
        self.grid: Grid = generate_grid(0, 0, self.settings, self.rng)
        self.offset: List[float] = [0.0, 0.0]
        self.time = 0.0
        self.pointer: Point = FAR_AWAY
        self._pointer_events: Deque[Point] = deque(maxlen=64)
        self._last_timestamp: Optional[float] = None
        self.frame_count = 0
        self.last_frame = None
        self.stats: Dict[str, int] = {"cells": 0, "visible": 0, "filled": 0, "recycled": 0}
        self._background = parse_color(self.settings.background_color)

    # ------------------------------------------------------------------
    @property
    def viewport(self) -> Tuple[float, float]:
        return (self.grid.width, self.grid.height)

    @property
    def mounted(self) -> bool:
        return self.task is not None

    @property
    def paused(self) -> bool:
        return self.task is not None and not self.task.running

    # Lifecycle --------------------------------------------------------
    def mount(
        self,
        surface: Optional[DrawingSurface],
        scheduler: FrameScheduler,
        events: Optional[EventSource] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        scale: float = 1.0,
    ) -> bool:
        """Attach to a surface and start animating. Returns False without one."""
        if surface is None:
            LOG.debug("No drawing surface supplied; animation not started")
            return False
        if self.mounted:
            self.teardown()
        self.surface = surface
        w = surface.width if width is None else width
        h = surface.height if height is None else height
        surface.resize(w, h, scale)
        self.grid = generate_grid(w, h, self.settings, self.rng, self.grid_origin())
        self._last_timestamp = None
        if events is not None:
            self.adapter.attach(events)
        self.task = FrameTask(scheduler, self.frame)
        self.task.start()
        LOG.info("Mounted on %gx%g surface (scale %g), %d cells", w, h, surface.scale, len(self.grid))
        return True

    def teardown(self) -> None:
        """Stop frames, detach listeners and drop all state. Safe to repeat."""
        if self.task is None and not self.adapter.attached:
            return
        if self.task is not None:
            self.task.stop()
        self.task = None
        self.adapter.detach()
        self.surface = None
        self.grid = generate_grid(0, 0, self.settings, self.rng)
        self.offset = [0.0, 0.0]
        self.time = 0.0
        self.pointer = FAR_AWAY
        self._pointer_events.clear()
        self._last_timestamp = None
        LOG.info("Engine torn down after %d frames", self.frame_count)

    def pause(self) -> None:
        if self.task is not None:
            self.task.stop()

    def resume(self) -> None:
        if self.task is not None and not self.task.running:
            self._last_timestamp = None
            self.task.start()

    # Events -----------------------------------------------------------
    def pointer_move(self, x: float, y: float) -> None:
        self._pointer_events.append((float(x), float(y)))

    def pointer_leave(self) -> None:
        self._pointer_events.append(FAR_AWAY)

    def resize(self, width: float, height: float, scale: Optional[float] = None) -> bool:
        """Resize the surface and regenerate the grid if the size changed."""
        if self.surface is not None:
            self.surface.resize(width, height, self.surface.scale if scale is None else scale)
        if (width, height) == self.viewport and self.grid.cells:
            return False
        self.grid = generate_grid(width, height, self.settings, self.rng, self.grid_origin())
        return True

    def regenerate(self) -> None:
        width, height = self.viewport
        self.grid = generate_grid(width, height, self.settings, self.rng, self.grid_origin())

    def grid_origin(self) -> Point:
        """Lattice point at or just north-west of the current pan offset.

        Y snaps to pairs of rows so odd rows keep their half-cell shift.
        """
        hex_width, _hex_height, spacing = hex_metrics(self.settings.hex_size)
        ox, oy = self.offset
        return (
            math.floor(ox / hex_width) * hex_width,
            math.floor(oy / (2 * spacing)) * 2 * spacing,
        )

    # Frame ------------------------------------------------------------
    def frame(self, timestamp: float):
        """One scheduled frame: update state then draw onto the surface."""
        dt = 0.0 if self._last_timestamp is None else timestamp - self._last_timestamp
        self._last_timestamp = timestamp
        self.advance(dt)
        self.frame_count += 1
        if self.surface is None:
            return None
        self.render(self.surface)
        self.last_frame = self.surface.present()
        return self.last_frame

    def advance(self, dt: float) -> None:
        s = self.settings
        dt = clamp(dt, 0.0, s.max_frame_delta)
        while self._pointer_events:
            self.pointer = self._pointer_events.popleft()
        self.time += dt
        scaled = dt * BASE_FPS
        self.offset[0] += s.pan_speed * scaled
        self.offset[1] += s.pan_speed * scaled
        if not self.grid.cells:
            return
        self.stats["recycled"] = self.recycle()
        for cell in self.grid.cells:
            self._step_oscillation(cell, scaled)
            self._step_hover(cell, scaled)

    def recycle(self) -> int:
        """Wrap cells past the north-west threshold by one tiling span."""
        grid = self.grid
        s = self.settings
        limit_x = -s.recycle_multiple * grid.hex_width
        limit_y = -s.recycle_multiple * grid.hex_height
        span_x, span_y = grid.span_x, grid.span_y
        recycled = 0
        for cell in grid.cells:
            while self.screen_position(cell)[0] < limit_x:
                cell.x += span_x
                cell.behavior = roll_behavior(s, self.rng, allow_highlight=True)
                recycled += 1
            while self.screen_position(cell)[1] < limit_y:
                cell.y += span_y
                cell.behavior = roll_behavior(s, self.rng, allow_highlight=True)
                recycled += 1
        return recycled

    def _step_oscillation(self, cell: Cell, scaled: float) -> None:
        behavior = cell.behavior
        osc = behavior.oscillation
        if osc is None:
            return
        low, high = self.settings.oscillation_band
        behavior.opacity += osc.rate * osc.direction * scaled
        if behavior.opacity > high:
            behavior.opacity = high
            osc.direction = -1
        elif behavior.opacity < low:
            behavior.opacity = low
            osc.direction = 1

    def _step_hover(self, cell: Cell, scaled: float) -> None:
        hover = cell.behavior.hover
        if hover is None:
            return
        s = self.settings
        inside = point_in_hexagon(self.pointer, self.screen_position(cell), s.hex_size)
        hover.target = s.hover_opacity if inside else 0.0
        # Entering eases twice as fast as leaving.
        speed = s.hover_delay if inside else s.hover_delay * 0.5
        factor = 1.0 - (1.0 - clamp(speed, 0.0, 1.0)) ** scaled
        hover.current += (hover.target - hover.current) * factor

    # Drawing ----------------------------------------------------------
    def screen_position(self, cell: Cell) -> Point:
        return (cell.x - self.offset[0], cell.y - self.offset[1])

    def visible_cells(self):
        grid = self.grid
        width, height = self.viewport
        mx, my = grid.hex_width, grid.hex_height
        for cell in grid.cells:
            sx, sy = self.screen_position(cell)
            if -mx < sx < width + mx and -my < sy < height + my:
                yield cell, sx, sy

    def cell_color(self, cell: Cell, alpha: float):
        tag = cell.behavior.highlight
        if tag is not None and tag in self.settings.highlight_colors:
            return with_alpha(self.settings.highlight_colors[tag], alpha)
        return with_alpha(self.settings.hexagon_color, alpha)

    def render(self, surface: DrawingSurface) -> int:
        """Draw the current state; returns the number of filled cells."""
        s = self.settings
        surface.clear(self._background)
        phase = self.time * s.wave_speed
        sampled = []
        for cell, sx, sy in self.visible_cells():
            samples = []
            for vx, vy in hexagon_vertices((sx, sy), s.hex_size):
                samples.append((vx, vy, wave(phase, (vx, vy), s.wave_frequency, s.wave_sharpness)))
            sampled.append((cell, samples))

        for _cell, samples in sampled:
            for vx, vy, w in samples:
                y = vy + ripple_offset(w, s.wave_amplitude) + marker_drift(phase, vx)
                brightness = s.star_base + w * s.star_gain
                surface.fill_circle((vx, y), s.star_radius, with_alpha(s.star_color, brightness))

        filled = 0
        for cell, samples in sampled:
            alpha = cell.combined_opacity
            if alpha <= MIN_VISIBLE_ALPHA:
                continue
            points = [(vx, vy + ripple_offset(w, s.wave_amplitude)) for vx, vy, w in samples]
            surface.fill_polygon(points, self.cell_color(cell, alpha))
            filled += 1

        self.stats.update(cells=len(self.grid), visible=len(sampled), filled=filled)
        return filled


__all__ = ["FAR_AWAY", "BASE_FPS", "HexDriftEngine"]
