from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import cv2
import numpy as np
import pygame

from flashlight.api.config import RevealConfig
from flashlight.raster.surface import CompositeMode, RasterSurface

logger = logging.getLogger(__name__)


class TextMask:
    """Glyph coverage: white, alpha = how much of the pixel the text covers. Read-only."""

    def __init__(self, alpha: np.ndarray):
        self.surface = RasterSurface.from_alpha(alpha).freeze()

    @property
    def alpha(self) -> np.ndarray:
        return self.surface.alpha

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.size

    def text_pixels(self, threshold: int) -> int:
        return int(np.count_nonzero(self.alpha > threshold))


class ColoredTextLayer:
    """The same glyphs in their final color with a soft glow, pixel-aligned with the mask."""

    def __init__(self, rgba: np.ndarray):
        self.surface = RasterSurface.from_rgba(rgba).freeze()

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.size


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap. A word wider than max_width still gets its own line.
    """
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def choose_font_size(container_width: float, cfg: RevealConfig) -> int:
    return int(min(cfg.font_size_max,
                   max(cfg.font_size_min, container_width // cfg.font_size_divisor)))


def _resolve_font_path(family: str, bold: bool, font_path: Optional[str]) -> str:
    if font_path:
        if not Path(font_path).is_file():
            raise FileNotFoundError(font_path)
        return str(font_path)
    path = pygame.font.match_font(family, bold=bold)
    if path is None:
        raise LookupError(f"no system font matches {family!r}")
    return path


def _open_font(path: str, size_px: int) -> pygame.font.Font:
    return pygame.font.Font(path, size_px)


def _load_worker(cfg: RevealConfig, bold: bool, size_px: int, result: dict,
                 done: threading.Event) -> None:
    try:
        path = _resolve_font_path(cfg.font_family, bold, cfg.font_path)
        result["font"] = _open_font(path, size_px)
    except (LookupError, OSError, pygame.error) as exc:
        result["error"] = exc
    finally:
        done.set()


def load_font(cfg: RevealConfig, size_px: int) -> Tuple[pygame.font.Font, bool]:
    """
    Returns (font, used_fallback). Lookup and opening of the font file can
    stall on a cold font cache, so both run on a daemon thread with a bounded
    wait; a worker still stuck after the wait is abandoned and does not hold
    up interpreter exit. Any failure falls back to pygame's bundled default
    font.
    """
    if not pygame.font.get_init():
        pygame.font.init()
    bold = cfg.font_weight >= 600

    result: dict = {}
    done = threading.Event()
    worker = threading.Thread(target=_load_worker, args=(cfg, bold, size_px, result, done),
                              name="font-loader", daemon=True)
    worker.start()

    if not done.wait(cfg.font_load_timeout):
        logger.info("font %r not ready after %.1fs; using default font",
                    cfg.font_family, cfg.font_load_timeout)
    elif "error" in result:
        logger.info("font %r unavailable (%s); using default font",
                    cfg.font_family, result["error"])
    else:
        return result["font"], False

    font = pygame.font.Font(None, size_px)
    font.set_bold(bold)
    return font, True


def _paste_max(dst: np.ndarray, src: np.ndarray, left: int, top: int) -> None:
    h, w = dst.shape
    sh, sw = src.shape
    x0, y0 = max(0, left), max(0, top)
    x1, y1 = min(w, left + sw), min(h, top + sh)
    if x0 >= x1 or y0 >= y1:
        return
    region = dst[y0:y1, x0:x1]
    np.maximum(region, src[y0 - top:y1 - top, x0 - left:x1 - left], out=region)


class TextMaskGenerator:
    """
    Lays the message out centered in the canvas and rasterizes it twice:
    a plain mask and a colored, glowing copy with identical geometry.
    """

    def __init__(self, cfg: RevealConfig):
        self.cfg = cfg
        self.used_fallback = False
        self.lines: List[str] = []

    def generate(self, message: str, container_size: Tuple[int, int],
                 pixel_density: float = 1.0) -> Tuple[TextMask, ColoredTextLayer]:
        cfg = self.cfg
        width, height = container_size
        w, h = int(width * pixel_density), int(height * pixel_density)
        # raises SurfaceUnavailableError for an empty container
        canvas = RasterSurface(w, h)

        size_px = max(1, int(round(choose_font_size(width, cfg) * pixel_density)))
        font, self.used_fallback = load_font(cfg, size_px)

        max_width = width * cfg.max_text_width_ratio * pixel_density
        self.lines = wrap_text(message, max_width, lambda s: font.size(s)[0])
        alpha = self._rasterize(font, self.lines, size_px * cfg.line_height, (w, h))

        return TextMask(alpha), ColoredTextLayer(self._colorize(alpha, pixel_density, canvas))

    @staticmethod
    def _rasterize(font: pygame.font.Font, lines: List[str], line_height: float,
                   size: Tuple[int, int]) -> np.ndarray:
        w, h = size
        alpha = np.zeros((h, w), dtype=np.uint8)
        start_y = h / 2 - (len(lines) - 1) * line_height / 2
        for i, line in enumerate(lines):
            glyphs = pygame.surfarray.array_alpha(font.render(line, True, (255, 255, 255))).T
            gh, gw = glyphs.shape
            # each line centered on (w/2, its baseline middle)
            cy = start_y + i * line_height
            _paste_max(alpha, glyphs, int(round(w / 2 - gw / 2)), int(round(cy - gh / 2)))
        return alpha

    def _colorize(self, alpha: np.ndarray, pixel_density: float,
                  canvas: RasterSurface) -> np.ndarray:
        cfg = self.cfg
        r, g, b, glow_a = cfg.glow_color
        sigma = cfg.glow_blur * pixel_density / 2
        glow = alpha.astype(np.float32) * (glow_a / 255.0)
        if sigma > 0:
            glow = cv2.GaussianBlur(glow, (0, 0), sigmaX=sigma, sigmaY=sigma)

        canvas.pixels[..., :3] = (r, g, b)
        canvas.pixels[..., 3] = np.clip(np.rint(glow), 0, 255).astype(np.uint8)
        canvas.composite(RasterSurface.from_alpha(alpha, cfg.text_color), CompositeMode.OVER)
        return canvas.pixels
