"""Offline clip rendering through Pillow surfaces and imageio."""
from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Callable, Iterator, Optional

import imageio.v2 as imageio
import numpy as np

from hexdrift.config import EngineSettings
from hexdrift.engine import HexDriftEngine
from hexdrift.geometry import Point
from hexdrift.scheduler import FrameScheduler
from hexdrift.surfaces import PillowSurface

LOG = logging.getLogger("hexdrift.render")

PointerPath = Callable[[float], Optional[Point]]


def render_frames(
    settings: EngineSettings,
    width: int,
    height: int,
    frames: int,
    fps: int = 30,
    rng: Optional[random.Random] = None,
    pointer_path: Optional[PointerPath] = None,
    scale: float = 1.0,
) -> Iterator[np.ndarray]:
    """Yield ``frames`` RGB arrays stepping the engine by ``1/fps`` each.

    ``pointer_path`` maps clip time to a pointer position, or None for a
    pointer outside the canvas.
    """
    engine = HexDriftEngine(settings, rng)
    scheduler = FrameScheduler()
    surface = PillowSurface(width, height, scale)
    engine.mount(surface, scheduler, width=width, height=height, scale=scale)
    step = 1.0 / max(1, fps)
    try:
        for idx in range(frames):
            t = idx * step
            if pointer_path is not None:
                pos = pointer_path(t)
                if pos is None:
                    engine.pointer_leave()
                else:
                    engine.pointer_move(*pos)
            # one dispatch runs the engine frame task once
            scheduler.dispatch(t)
            yield np.array(engine.last_frame, dtype=np.uint8)
    finally:
        engine.teardown()


def render_clip(
    settings: EngineSettings,
    width: int,
    height: int,
    frames: int,
    fps: int,
    output_path: Path,
    rng: Optional[random.Random] = None,
    pointer_path: Optional[PointerPath] = None,
    scale: float = 1.0,
) -> Optional[Path]:
    """Render a clip to ``output_path`` (GIF, MP4, ...); None if nothing rendered."""
    if frames <= 0:
        LOG.warning("Nothing to render: frame count is %d", frames)
        return None
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    start = time.perf_counter()
    progress_interval = max(1, frames // 20)
    if output_path.suffix.lower() == ".gif":
        writer_kwargs = {"duration": 1000.0 / max(1, fps), "loop": 0}
    else:
        writer_kwargs = {"fps": fps, "macro_block_size": 1}
    writer = imageio.get_writer(output_path, **writer_kwargs)
    try:
        for idx, frame in enumerate(
            render_frames(settings, width, height, frames, fps, rng, pointer_path, scale)
        ):
            writer.append_data(frame)
            if idx % progress_interval == 0 or idx == frames - 1:
                LOG.info("Rendering frame %d/%d...", idx + 1, frames)
    finally:
        writer.close()
    LOG.info("Render complete in %.1fs. Saved to %s", time.perf_counter() - start, output_path)
    return output_path


__all__ = ["PointerPath", "render_frames", "render_clip"]
