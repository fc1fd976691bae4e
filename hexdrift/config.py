"""Loading and validating HexDrift configuration."""
from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from hexdrift.colors import parse_color

# --------------------------- CONFIG ---------------------------
DEFAULT_CONFIG: Dict[str, Any] = {
    # Grid
    "hex_size": 30.0,
    "special_chance": 0.01,
    "oscillating_ratio": 0.2,
    "static_ratio": 0.2,
    "highlight_ratio": 1.0,
    "recycle_multiple": 3,

    # Motion
    "pan_speed": 0.15,
    "max_frame_delta": 0.25,

    # Colors
    "background_color": "#0f0a1a",
    "hexagon_color": "#3b82f6",
    "star_color": "rgba(100, 116, 139, 0.3)",
    "highlight_colors": {"red": "#ef4444", "green": "#22c55e"},

    # Opacity state machines
    "oscillation_band": (0.05, 0.4),
    "oscillation_rate": (0.002, 0.008),
    "hover_delay": 0.3,
    "hover_opacity": 0.8,

    # Wave
    "wave_speed": 2.0,
    "wave_frequency": (0.003, 0.003),
    "wave_sharpness": 4.0,
    "wave_amplitude": 4.0,

    # Vertex markers
    "star_radius": 1.5,
    "star_base": 0.08,
    "star_gain": 0.08,

    # Host window / recording
    "width": 1280,
    "height": 720,
    "pixel_ratio": 1.0,
    "fps": 60,
    "resizable": True,
    "debug_overlay": False,
    "save_frames_dir": "frames",
    "record_path": "hexdrift.gif",
    "record_fps": 30,
    "record_frames": 180,
    "seed": None,
}
# --------------------------------------------------------------


def _coerce_config_value(value, default):
    """Best-effort coercion of JSON-loaded values to match defaults."""

    if isinstance(default, tuple):
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return default
    if isinstance(default, dict) and isinstance(value, dict):
        coerced = default.copy()
        coerced.update(value)
        return coerced
    return value


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load a JSON config file over the defaults.

    A missing file yields the defaults; a malformed one is an error.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None or not Path(path).exists():
        return config
    path = Path(path)
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Failed to parse config file {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise RuntimeError(f"Config file {path} must contain a JSON object")
    for key, value in loaded.items():
        if key in config:
            config[key] = _coerce_config_value(value, config[key])
        else:
            config[key] = value
    return config


def resolve_path(path_value: Optional[str], base_dir: Path) -> Optional[Path]:
    if path_value in (None, ""):
        return None
    path = Path(str(path_value)).expanduser()
    if path.is_absolute():
        return path
    return (base_dir / path).resolve()


@dataclass
class EngineSettings:
    """Typed view of the keys the animation engine reads."""

    hex_size: float = 30.0
    special_chance: float = 0.01
    oscillating_ratio: float = 0.2
    static_ratio: float = 0.2
    highlight_ratio: float = 1.0
    recycle_multiple: int = 3
    pan_speed: float = 0.15
    max_frame_delta: float = 0.25
    background_color: str = "#0f0a1a"
    hexagon_color: str = "#3b82f6"
    star_color: str = "rgba(100, 116, 139, 0.3)"
    highlight_colors: Dict[str, str] = field(
        default_factory=lambda: {"red": "#ef4444", "green": "#22c55e"}
    )
    oscillation_band: Tuple[float, float] = (0.05, 0.4)
    oscillation_rate: Tuple[float, float] = (0.002, 0.008)
    hover_delay: float = 0.3
    hover_opacity: float = 0.8
    wave_speed: float = 2.0
    wave_frequency: Tuple[float, float] = (0.003, 0.003)
    wave_sharpness: float = 4.0
    wave_amplitude: float = 4.0
    star_radius: float = 1.5
    star_base: float = 0.08
    star_gain: float = 0.08

    def __post_init__(self) -> None:
        if self.hex_size <= 0:
            raise ValueError(f"hex_size must be positive, got {self.hex_size}")
        for name in ("special_chance", "hover_opacity", "hover_delay"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        low, high = self.oscillation_band
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"oscillation_band must satisfy 0 <= low <= high <= 1, got {self.oscillation_band}")
        if self.recycle_multiple < 1:
            raise ValueError("recycle_multiple must be at least 1")
        if not self.highlight_colors:
            raise ValueError("highlight_colors needs at least one entry")
        # Fail early on bad colors instead of mid-frame.
        for color in (self.background_color, self.hexagon_color, self.star_color, *self.highlight_colors.values()):
            parse_color(color)

    @property
    def oscillating_chance(self) -> float:
        return self.special_chance * self.oscillating_ratio

    @property
    def static_chance(self) -> float:
        return self.special_chance * self.static_ratio

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "EngineSettings":
        defaults = cls()
        kwargs: Dict[str, Any] = {}
        for name in cls.__dataclass_fields__:
            if name not in config:
                continue
            value = _coerce_config_value(config[name], getattr(defaults, name))
            if isinstance(value, tuple):
                value = tuple(float(v) for v in value)
            elif name == "recycle_multiple":
                value = int(value)
            elif isinstance(getattr(defaults, name), float):
                value = float(value)
            kwargs[name] = value
        return cls(**kwargs)


__all__ = ["DEFAULT_CONFIG", "EngineSettings", "load_config", "resolve_path"]
