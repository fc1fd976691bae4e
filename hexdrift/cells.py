"""Per-cell animation state and the randomized behavior roll."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Set

from hexdrift.config import EngineSettings

INERT = "inert"
OSCILLATING = "oscillating"
STATIC = "static"
HOVER = "hover"

# A highlight seed links itself plus one or two neighbours.
HIGHLIGHT_GROUP_MEAN = 2.5


@dataclass
class Oscillation:
    rate: float
    direction: int


@dataclass
class HoverState:
    current: float = 0.0
    target: float = 0.0


@dataclass
class CellBehavior:
    """Everything about a cell that gets re-rolled when it is recycled."""

    opacity: float = 0.0
    oscillation: Optional[Oscillation] = None
    static_lit: bool = False
    hover: Optional[HoverState] = None
    highlight: Optional[str] = None

    @property
    def profile(self) -> Set[str]:
        kinds: Set[str] = set()
        if self.oscillation is not None:
            kinds.add(OSCILLATING)
        elif self.static_lit:
            kinds.add(STATIC)
        if self.hover is not None:
            kinds.add(HOVER)
        if not kinds:
            kinds.add(INERT)
        return kinds


@dataclass
class Cell:
    x: float
    y: float
    behavior: CellBehavior = field(default_factory=CellBehavior)

    @property
    def opacity(self) -> float:
        return self.behavior.opacity

    @property
    def hover_opacity(self) -> float:
        hover = self.behavior.hover
        return hover.current if hover is not None else 0.0

    @property
    def combined_opacity(self) -> float:
        return max(self.behavior.opacity, self.hover_opacity)


def make_oscillating(behavior: CellBehavior, settings: EngineSettings, rng: random.Random) -> None:
    """Turn ``behavior`` into an oscillating cell with a fresh rate and phase."""
    low, high = settings.oscillation_band
    rate_lo, rate_hi = settings.oscillation_rate
    behavior.oscillation = Oscillation(rate=rng.uniform(rate_lo, rate_hi), direction=rng.choice((-1, 1)))
    behavior.static_lit = False
    behavior.opacity = rng.uniform(low, high)


def roll_behavior(
    settings: EngineSettings,
    rng: random.Random,
    allow_highlight: bool = False,
) -> CellBehavior:
    """Draw a behavior profile the way a freshly generated cell gets one.

    Each flag is an independent draw. Highlights are normally assigned by
    the grid's group pass; ``allow_highlight`` lets recycled cells pick one
    up on their own so the density holds over a long pan.
    """
    behavior = CellBehavior()
    p = settings.special_chance
    if rng.random() < p:
        behavior.hover = HoverState()
    if rng.random() < settings.oscillating_chance:
        make_oscillating(behavior, settings, rng)
    elif rng.random() < settings.static_chance:
        low, high = settings.oscillation_band
        behavior.static_lit = True
        behavior.opacity = rng.uniform(low, high)
    if allow_highlight and rng.random() < p * settings.highlight_ratio * HIGHLIGHT_GROUP_MEAN:
        behavior.highlight = rng.choice(sorted(settings.highlight_colors))
        make_oscillating(behavior, settings, rng)
    return behavior


__all__ = [
    "INERT",
    "OSCILLATING",
    "STATIC",
    "HOVER",
    "Oscillation",
    "HoverState",
    "CellBehavior",
    "Cell",
    "make_oscillating",
    "roll_behavior",
]
