"""Hexagon geometry helpers shared by the grid generator and the engine."""
from __future__ import annotations

import math
from typing import List, Tuple

Point = Tuple[float, float]

SQRT3 = math.sqrt(3)


def hex_metrics(size: float) -> Tuple[float, float, float]:
    """Return ``(hex_width, hex_height, vertical_spacing)`` for a cell size."""
    hex_width = size * SQRT3
    hex_height = size * 2.0
    return hex_width, hex_height, hex_height * 0.75


def hexagon_vertices(center: Point, size: float) -> List[Point]:
    """Corners of a pointy-top hexagon, clockwise from the upper right."""
    cx, cy = center
    pts = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 6
        pts.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return pts


def point_in_hexagon(point: Point, center: Point, size: float) -> bool:
    """Containment test built from the side and slanted edges."""
    dx = abs(point[0] - center[0])
    dy = abs(point[1] - center[1])
    if dx > size * SQRT3 / 2 or dy > size:
        return False
    return dy <= size * (1 - dx / (size * SQRT3))


__all__ = ["Point", "hex_metrics", "hexagon_vertices", "point_in_hexagon"]
