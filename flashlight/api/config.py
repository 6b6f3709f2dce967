from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    pixel_density: float = 1.0
    fps: int = 60
    debug: bool = False


@dataclass(frozen=True)
class RevealConfig:
    """
    Every fixed constant of the reveal widget. Built once and handed to the
    widget at construction; stage manifests override fields via `options`.
    """

    # Reveal
    flashlight_radius: float = 120.0         # canvas px
    reveal_threshold: float = 0.92           # fraction of text pixels that must be revealed
    alpha_threshold: int = 20                # alpha above this marks a text / revealed pixel
    incremental_progress: bool = True        # running counter instead of a full scan per update

    # Text layout
    font_family: str = "Playfair Display"
    font_weight: int = 600
    font_path: Optional[str] = None          # explicit .ttf/.otf wins over family lookup
    font_load_timeout: float = 2.0           # seconds before falling back to the default font
    font_size_min: int = 32
    font_size_max: int = 56
    font_size_divisor: int = 10              # font size ~ container width / divisor
    max_text_width_ratio: float = 0.9
    line_height: float = 1.45

    # Colors
    text_color: Tuple[int, int, int] = (236, 72, 153)
    glow_color: Tuple[int, int, int, int] = (236, 72, 153, 204)
    glow_blur: float = 20.0
    halo_color: Tuple[int, int, int] = (148, 163, 184)
    halo_stops: Tuple[Tuple[float, float], ...] = ((0.0, 0.25), (0.5, 0.08), (1.0, 0.0))
    background_color: Tuple[int, int, int] = (2, 6, 23)

    # Backdrop
    noise_chars: Tuple[str, ...] = ("x", "o", "♡", "?")
    noise_count: int = 350
    noise_color: Tuple[int, int, int] = (244, 114, 182)
    noise_opacity: float = 0.15

    # Cursor
    cursor_hotspot: Tuple[int, int] = (16, 16)
    cursor_image: Optional[str] = None

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]]) -> "RevealConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options or {}) - known)
        if unknown:
            raise ValueError(f"Unknown reveal options: {', '.join(unknown)}")
        kwargs = {k: _freeze(v) for k, v in (options or {}).items()}
        return cls(**kwargs)


def _freeze(value: Any) -> Any:
    # YAML gives lists; the config is hashable and immutable
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value
