from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from flashlight.api.config import RevealConfig
from flashlight.api.pointer import Point
from flashlight.raster.surface import CompositeMode, RasterSurface
from flashlight.reveal.accumulator import RevealAccumulator
from flashlight.reveal.completion import CompletionDetector
from flashlight.reveal.text_mask import ColoredTextLayer


def radial_halo(x: float, y: float, radius: float, color: Tuple[int, int, int],
                stops: Sequence[Tuple[float, float]]) -> Tuple[RasterSurface, Tuple[int, int]]:
    """
    Soft disc centered on (x, y). Opacity is interpolated linearly between
    `stops` (offset in [0, 1] of the radius, opacity in [0, 1]); nothing is
    drawn past the radius. Returns the surface and its top-left in canvas px.
    """
    x0, y0 = math.floor(x - radius), math.floor(y - radius)
    size = int(math.ceil(2 * radius)) + 2
    halo = RasterSurface(size, size)

    yy, xx = np.mgrid[0:size, 0:size].astype(np.float32)
    t = np.hypot(xx + x0 - x, yy + y0 - y) / radius
    offsets = [s[0] for s in stops]
    opacities = [s[1] for s in stops]
    a = np.interp(t, offsets, opacities)
    a[t > 1.0] = 0.0

    halo.pixels[..., :3] = color
    halo.pixels[..., 3] = np.clip(np.rint(a * 255.0), 0, 255).astype(np.uint8)
    return halo, (x0, y0)


class CompositorRenderer:
    """
    Builds the visible frame: live halo, then the revealed text in full color.

    `revealed` caches the colored text kept to the accumulated coverage; it is
    refreshed only where the accumulator was stamped, and each frame starts as
    a copy of it with blending limited to the halo's box.
    """

    def __init__(self, canvas: RasterSurface, accumulator: RevealAccumulator,
                 colored: ColoredTextLayer, detector: CompletionDetector,
                 cfg: RevealConfig):
        self.canvas = canvas
        self.accumulator = accumulator
        self.colored = colored
        self.detector = detector
        self.cfg = cfg

        w, h = canvas.size
        self.revealed = RasterSurface(w, h)
        accumulator.take_dirty()
        self._refresh((0, 0, w, h))

    def render(self, pointer: Optional[Point] = None) -> bool:
        # the frame drawn at completion stays on screen
        if self.detector.complete:
            return False
        self._compose(pointer)
        return True

    def freeze(self) -> None:
        """Draw the terminal frame: revealed text only, no halo."""
        self._compose(None)

    def _near_canvas(self, p: Point) -> bool:
        w, h = self.canvas.size
        r = self.cfg.flashlight_radius
        return -r <= p.x <= w + r and -r <= p.y <= h + r

    def _refresh(self, rect: Tuple[int, int, int, int]) -> None:
        x0, y0, x1, y1 = rect
        region = self.revealed.crop(x0, y0, x1, y1)
        region.pixels[...] = self.accumulator.surface.crop(x0, y0, x1, y1).pixels
        region.composite(self.colored.surface.crop(x0, y0, x1, y1), CompositeMode.KEEP_OVERLAP)

    def _compose(self, pointer: Optional[Point]) -> None:
        cfg = self.cfg
        dirty = self.accumulator.take_dirty()
        if dirty is not None:
            self._refresh(dirty)
        self.canvas.pixels[...] = self.revealed.pixels

        if pointer is None or not self._near_canvas(pointer):
            return
        halo, (hx, hy) = radial_halo(pointer.x, pointer.y, cfg.flashlight_radius,
                                     cfg.halo_color, cfg.halo_stops)
        w, h = self.canvas.size
        x0, y0 = max(0, hx), max(0, hy)
        x1, y1 = min(w, hx + halo.width), min(h, hy + halo.height)
        if x0 >= x1 or y0 >= y1:
            return

        # text shows through wherever there is coverage: fully where revealed,
        # faintly under the halo
        lit = halo.crop(x0 - hx, y0 - hy, x1 - hx, y1 - hy).copy()
        lit.composite(self.accumulator.surface.crop(x0, y0, x1, y1), CompositeMode.OVER)
        lit.composite(self.colored.surface.crop(x0, y0, x1, y1), CompositeMode.KEEP_OVERLAP)
        self.canvas.crop(x0, y0, x1, y1).pixels[...] = lit.pixels
