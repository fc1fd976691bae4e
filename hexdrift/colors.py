"""Color parsing with alpha injection for hex and rgba-style strings."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Tuple

from PIL import ImageColor

RGBA = Tuple[int, int, int, int]

_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)$",
    re.IGNORECASE,
)


def clamp(x, a, b):
    return a if x < a else (b if x > b else x)


@lru_cache(maxsize=64)
def parse_color(value: str) -> RGBA:
    """Parse ``#rgb``, ``#rrggbb[aa]``, named colors and ``rgb()/rgba()``.

    CSS-style fractional alpha (``rgba(1, 2, 3, 0.3)``) is accepted, which
    Pillow's parser alone does not handle.
    """
    text = str(value).strip()
    match = _RGBA_RE.match(text)
    if match:
        r, g, b = (clamp(int(match.group(i)), 0, 255) for i in range(1, 4))
        alpha_raw = match.group(4)
        if alpha_raw is None:
            return (r, g, b, 255)
        alpha = float(alpha_raw)
        # "rgba(.., 0.3)" is a fraction, "rgba(.., 77)" is a byte
        a = int(round(alpha * 255)) if alpha <= 1.0 else int(alpha)
        return (r, g, b, clamp(a, 0, 255))
    rgb = ImageColor.getrgb(text)
    if len(rgb) == 4:
        return rgb  # type: ignore[return-value]
    return (rgb[0], rgb[1], rgb[2], 255)


def with_alpha(value: str, alpha: float) -> RGBA:
    """Return ``value`` as RGBA with its alpha replaced by ``alpha`` (0..1)."""
    r, g, b, _a = parse_color(value)
    return (r, g, b, int(clamp(alpha, 0.0, 1.0) * 255))


__all__ = ["RGBA", "clamp", "parse_color", "with_alpha"]
