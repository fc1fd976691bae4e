"""Traveling wave used for vertex ripple and marker brightness."""
from __future__ import annotations

import math
from typing import Tuple

from hexdrift.geometry import Point

DEFAULT_FREQUENCY: Tuple[float, float] = (0.003, 0.003)
DEFAULT_SHARPNESS = 4.0


def wave(
    time: float,
    position: Point,
    frequency: Tuple[float, float] = DEFAULT_FREQUENCY,
    sharpness: float = DEFAULT_SHARPNESS,
) -> float:
    """Return a value in [0, 1] that travels diagonally across the plane.

    The raw sine is raised to ``sharpness`` so the surface reads as short
    bright pulses over long dim troughs.
    """
    kx, ky = frequency
    raw = (math.sin(time + position[0] * kx + position[1] * ky) + 1.0) / 2.0
    return raw ** sharpness


def ripple_offset(value: float, amplitude: float) -> float:
    """Vertical displacement for a wave sample; positive wave lifts the point."""
    return -(value - 0.5) * amplitude


def marker_drift(time: float, x: float) -> float:
    """Slow extra bob applied to vertex markers only."""
    return math.sin(time * 0.5 + x * 0.002)


__all__ = ["DEFAULT_FREQUENCY", "DEFAULT_SHARPNESS", "wave", "ripple_offset", "marker_drift"]
