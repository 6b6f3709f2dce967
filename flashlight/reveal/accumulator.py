from __future__ import annotations
import math
from typing import Optional, Tuple

import numpy as np

from flashlight.raster.surface import CompositeMode, RasterSurface
from flashlight.reveal.text_mask import TextMask

Rect = Tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)


class RevealAccumulator:
    """
    Everything the flashlight has ever uncovered, limited to text pixels.
    Coverage only grows: each stamp is merged with a per-pixel max.

    Stamped rectangles are collected until `take_dirty()` so renderers can
    refresh only what changed.
    """

    def __init__(self, mask: TextMask, alpha_threshold: int = 20):
        self.mask = mask
        self.alpha_threshold = alpha_threshold
        w, h = mask.size
        self.surface = RasterSurface(w, h)
        self._dirty: Optional[Rect] = None

    @property
    def alpha(self) -> np.ndarray:
        return self.surface.alpha

    def take_dirty(self) -> Optional[Rect]:
        rect, self._dirty = self._dirty, None
        return rect

    def _mark_dirty(self, rect: Rect) -> None:
        if self._dirty is None:
            self._dirty = rect
            return
        a, b = self._dirty, rect
        self._dirty = (min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3]))

    def stamp(self, x: float, y: float, radius: float) -> int:
        """
        Union a disc of `radius` at (x, y), clipped to the text shape, into the
        coverage. Returns how many text pixels became revealed by this stamp.
        """
        w, h = self.surface.size
        if not (-radius <= x <= w + radius and -radius <= y <= h + radius):
            return 0

        x0, y0 = max(0, math.floor(x - radius)), max(0, math.floor(y - radius))
        x1, y1 = min(w, math.ceil(x + radius) + 1), min(h, math.ceil(y + radius) + 1)
        if x0 >= x1 or y0 >= y1:
            return 0

        disc = RasterSurface(x1 - x0, y1 - y0)
        disc.fill_disc(x - x0, y - y0, radius)
        disc.composite(self.mask.surface.crop(x0, y0, x1, y1), CompositeMode.KEEP_OVERLAP)

        region = self.surface.crop(x0, y0, x1, y1)
        thr = self.alpha_threshold
        text = self.mask.alpha[y0:y1, x0:x1] > thr
        before = region.alpha > thr
        region.composite(disc, CompositeMode.UNION)
        after = region.alpha > thr
        if disc.alpha.any():
            self._mark_dirty((x0, y0, x1, y1))
        return int(np.count_nonzero(after & ~before & text))
