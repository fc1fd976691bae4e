#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Hex Drift: endless panning hexagon field
----------------------------------------
Live pygame window around the hexdrift engine. F2 shows the hotkeys.
Pass --render to write a clip instead of opening a window.
"""
from __future__ import annotations

import argparse
import logging
import os
import random
import time
from pathlib import Path
from typing import Dict, Optional

import pygame

from hexdrift.config import EngineSettings, load_config, resolve_path
from hexdrift.engine import HexDriftEngine
from hexdrift.interaction import POINTER_LEAVE, POINTER_MOVE, RESIZE, EventSource
from hexdrift.render import render_clip
from hexdrift.scheduler import FrameScheduler
from hexdrift.surfaces import PygameSurface

LOG = logging.getLogger("hexdrift.tool")

SCRIPT_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = SCRIPT_DIR / "config.json"

HELP_SECTIONS = [
    ("Core", [
        ("Space", "Pause / Resume"),
        ("R", "Regenerate the grid"),
        ("F2", "Toggle this help"),
        ("F3", "Toggle debug overlay"),
        ("F4", "Screenshot to 'frames/'"),
    ]),
    ("Exit", [
        ("Esc", "Quit"),
    ]),
]


def prepare_runtime_config(config_path: Optional[Path], output_root: Optional[str]) -> Dict:
    """Load config and resolve output paths against the config/output dir."""
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    config_dir = config_path.resolve().parent
    output_dir = Path(output_root).resolve() if output_root else config_dir

    config = load_config(config_path)
    config["save_frames_dir"] = resolve_path(config.get("save_frames_dir") or "frames", output_dir)
    config["record_path"] = resolve_path(config.get("record_path") or "hexdrift.gif", output_dir)
    return config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hex Drift")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to a JSON config file")
    parser.add_argument(
        "--output-dir",
        help="Base directory for screenshots and renders (overrides config paths)",
    )
    parser.add_argument("--render", metavar="PATH", help="Render a clip to PATH instead of opening a window")
    parser.add_argument("--frames", type=int, help="Frame count for --render")
    parser.add_argument("--seed", type=int, help="Seed the random source")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args()


# ---------------------- Help overlay --------------------------
def _draw_help_overlay(screen, width, height):
    pad = 16
    max_w = min(520, int(width * 0.8))
    max_h = min(320, int(height * 0.8))
    surf = pygame.Surface((max_w, max_h), pygame.SRCALPHA)
    surf.fill((0, 0, 0, 200))
    title_font = pygame.font.SysFont(None, 28, bold=True)
    item_font = pygame.font.SysFont("monospace", 18)

    y = pad
    surf.blit(title_font.render("Hex Drift: Help (F2 to close)", True, (230, 230, 235)), (pad, y))
    y += 36
    for section, items in HELP_SECTIONS:
        surf.blit(title_font.render(section, True, (210, 210, 220)), (pad, y))
        y += 28
        for key, desc in items:
            surf.blit(item_font.render(f"{key:>6}  -  {desc}", True, (235, 235, 240)), (pad, y))
            y += 22
        y += 10

    dst = screen.get_rect()
    screen.blit(surf, (dst.centerx - max_w // 2, dst.centery - max_h // 2))


def _draw_debug_overlay(screen, clock, engine: HexDriftEngine):
    stats = engine.stats
    txt = (
        f"FPS:{clock.get_fps():5.1f}  cells:{stats['cells']}  visible:{stats['visible']}"
        f"  lit:{stats['filled']}  {'PAUSED' if engine.paused else ''}"
    )
    font = pygame.font.SysFont("monospace", 14)
    screen.blit(font.render(txt, True, (230, 230, 235)), (12, 10))


# -------------------------- Main ------------------------------
def run_window(config: Dict, rng: random.Random) -> None:
    pygame.init()
    flags = pygame.DOUBLEBUF | (pygame.RESIZABLE if config["resizable"] else 0)
    screen = pygame.display.set_mode((int(config["width"]), int(config["height"])), flags)
    pygame.display.set_caption("Hex Drift")
    clock = pygame.time.Clock()

    settings = EngineSettings.from_config(config)
    engine = HexDriftEngine(settings, rng)
    scheduler = FrameScheduler()
    events = EventSource()
    surface = PygameSurface()
    width, height = screen.get_size()
    engine.mount(surface, scheduler, events, width, height, float(config["pixel_ratio"]))

    debug = bool(config["debug_overlay"])
    help_visible = False
    frames_dir = Path(config["save_frames_dir"])

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEMOTION:
                    events.emit(POINTER_MOVE, *event.pos)
                elif event.type == pygame.WINDOWLEAVE:
                    events.emit(POINTER_LEAVE)
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.get_surface()
                    events.emit(RESIZE, *screen.get_size())
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        if engine.paused:
                            engine.resume()
                        else:
                            engine.pause()
                        LOG.info("Animation %s", "paused" if engine.paused else "resumed")
                    elif event.key == pygame.K_r:
                        engine.regenerate()
                        LOG.info("Regenerated grid: %d cells", len(engine.grid))
                    elif event.key == pygame.K_F2:
                        help_visible = not help_visible
                    elif event.key == pygame.K_F3:
                        debug = not debug
                    elif event.key == pygame.K_F4:
                        os.makedirs(frames_dir, exist_ok=True)
                        path = frames_dir / f"hexdrift_{int(time.time() * 1000)}.png"
                        pygame.image.save(screen, str(path))
                        LOG.info("Saved screenshot: %s", path)

            scheduler.dispatch(pygame.time.get_ticks() / 1000.0)
            surface.blit_to(screen)

            if help_visible:
                _draw_help_overlay(screen, *screen.get_size())
            if debug:
                _draw_debug_overlay(screen, clock, engine)

            pygame.display.flip()
            clock.tick(int(config["fps"]))
    finally:
        engine.teardown()
        pygame.quit()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    config = prepare_runtime_config(Path(args.config), args.output_dir)
    seed = args.seed if args.seed is not None else config.get("seed")
    rng = random.Random(seed)

    if args.render:
        output = resolve_path(args.render, Path.cwd())
        render_clip(
            EngineSettings.from_config(config),
            int(config["width"]),
            int(config["height"]),
            args.frames if args.frames is not None else int(config["record_frames"]),
            int(config["record_fps"]),
            output,
            rng=rng,
            scale=float(config["pixel_ratio"]),
        )
        return

    run_window(config, rng)


if __name__ == "__main__":
    main()
