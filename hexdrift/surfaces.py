"""Drawing surfaces the engine renders onto.

Both backends keep an opaque base layer plus a transparent overlay. Fills
go to the overlay with their alpha intact and :meth:`present` composites
the two, so translucent cells and markers blend against the background.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from hexdrift.colors import RGBA
from hexdrift.geometry import Point

try:
    import pygame
except Exception:  # pragma: no cover - defer error handling until runtime
    pygame = None


class DrawingSurface:
    """Immediate-mode 2D target with a possibly denser backing buffer.

    Callers draw in logical units; ``scale`` (the device pixel ratio) is
    applied to every coordinate at draw time.
    """

    def __init__(self) -> None:
        self.width = 0.0
        self.height = 0.0
        self.scale = 1.0

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return (
            max(1, int(round(self.width * self.scale))),
            max(1, int(round(self.height * self.scale))),
        )

    def resize(self, width: float, height: float, scale: float = 1.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.scale = float(scale) if scale > 0 else 1.0
        self._allocate()

    def _scaled(self, points: Sequence[Point]):
        s = self.scale
        return [(x * s, y * s) for x, y in points]

    def _allocate(self) -> None:  # pragma: no cover - backend specific
        raise NotImplementedError

    def clear(self, color: RGBA) -> None:  # pragma: no cover - backend specific
        raise NotImplementedError

    def fill_polygon(self, points: Sequence[Point], color: RGBA) -> None:  # pragma: no cover
        raise NotImplementedError

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:  # pragma: no cover
        raise NotImplementedError

    def present(self):  # pragma: no cover - backend specific
        raise NotImplementedError


class PillowSurface(DrawingSurface):
    """Offscreen surface backed by Pillow images; used for clip renders."""

    def __init__(self, width: float = 0, height: float = 0, scale: float = 1.0) -> None:
        super().__init__()
        self.base: Optional[Image.Image] = None
        self.overlay: Optional[Image.Image] = None
        self._draw: Optional[ImageDraw.ImageDraw] = None
        self.resize(width, height, scale)

    def _allocate(self) -> None:
        size = self.pixel_size
        self.base = Image.new("RGB", size, (0, 0, 0))
        self.overlay = Image.new("RGBA", size, (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.overlay)

    def clear(self, color: RGBA) -> None:
        self.base.paste(tuple(color[:3]), (0, 0, self.base.width, self.base.height))
        self.overlay.paste((0, 0, 0, 0), (0, 0, self.overlay.width, self.overlay.height))

    def fill_polygon(self, points: Sequence[Point], color: RGBA) -> None:
        self._draw.polygon(self._scaled(points), fill=tuple(color))

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        (cx, cy), = self._scaled([center])
        r = radius * self.scale
        self._draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=tuple(color))

    def present(self) -> Image.Image:
        frame = Image.alpha_composite(self.base.convert("RGBA"), self.overlay)
        return frame.convert("RGB")


class PygameSurface(DrawingSurface):
    """Live surface for the pygame window."""

    def __init__(self, width: float = 0, height: float = 0, scale: float = 1.0) -> None:
        if pygame is None:
            raise RuntimeError("pygame is required for PygameSurface")
        super().__init__()
        self.base = None
        self.overlay = None
        self.resize(width, height, scale)

    def _allocate(self) -> None:
        size = self.pixel_size
        self.base = pygame.Surface(size, 0, 32)
        self.overlay = pygame.Surface(size, pygame.SRCALPHA, 32)

    def clear(self, color: RGBA) -> None:
        self.base.fill(tuple(color[:3]))
        self.overlay.fill((0, 0, 0, 0))

    def fill_polygon(self, points: Sequence[Point], color: RGBA) -> None:
        pygame.draw.polygon(self.overlay, color, self._scaled(points))

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        (cx, cy), = self._scaled([center])
        pygame.draw.circle(self.overlay, color, (cx, cy), max(1.0, radius * self.scale))

    def present(self):
        self.base.blit(self.overlay, (0, 0))
        return self.base

    def blit_to(self, target) -> None:
        """Copy the last presented frame onto ``target``, scaling if needed."""
        if target.get_size() == self.base.get_size():
            target.blit(self.base, (0, 0))
        else:
            target.blit(pygame.transform.smoothscale(self.base, target.get_size()), (0, 0))


__all__ = ["DrawingSurface", "PillowSurface", "PygameSurface"]
