from __future__ import annotations
from enum import Enum
from typing import Optional, Tuple

import cv2
import numpy as np
import pygame

# cv2.circle sub-pixel precision: coordinates are fixed point with this many fractional bits
_SHIFT = 4
_ONE = 1 << _SHIFT


class SurfaceUnavailableError(RuntimeError):
    """The host cannot provide a drawable surface of the requested size."""


class CompositeMode(Enum):
    OVER = 1            # source drawn on top of destination
    KEEP_OVERLAP = 2    # shape = source ∩ destination, color = source; the rest is cleared
    UNION = 3           # per-pixel max coverage


class RasterSurface:
    """
    Straight-alpha RGBA bitmap backed by a (height, width, 4) uint8 array.

    Surfaces returned by `crop` share memory with their parent, so drawing
    into a crop draws into the parent.
    """

    def __init__(self, width: int, height: int, pixels: Optional[np.ndarray] = None):
        if pixels is None:
            if width <= 0 or height <= 0:
                raise SurfaceUnavailableError(
                    f"cannot allocate a {width}x{height} surface")
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels = pixels

    @classmethod
    def wrap(cls, pixels: np.ndarray) -> "RasterSurface":
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError("expected a (h, w, 4) uint8 array")
        h, w = pixels.shape[:2]
        return cls(w, h, pixels=pixels)

    @classmethod
    def from_alpha(cls, alpha: np.ndarray,
                   color: Tuple[int, int, int] = (255, 255, 255)) -> "RasterSurface":
        h, w = alpha.shape
        surf = cls(w, h)
        surf.pixels[..., :3] = color
        surf.pixels[..., 3] = alpha
        return surf

    @classmethod
    def from_rgba(cls, rgba: np.ndarray) -> "RasterSurface":
        return cls.wrap(np.ascontiguousarray(rgba, dtype=np.uint8).copy())

    # ------------- geometry -------------
    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[..., 3]

    def crop(self, x0: int, y0: int, x1: int, y1: int) -> "RasterSurface":
        x0, y0 = max(0, x0), max(0, y0)
        x1, y1 = min(self.width, x1), min(self.height, y1)
        return RasterSurface.wrap(self.pixels[y0:y1, x0:x1])

    def copy(self) -> "RasterSurface":
        return RasterSurface.wrap(self.pixels.copy())

    def freeze(self) -> "RasterSurface":
        self.pixels.setflags(write=False)
        return self

    # ------------- drawing -------------
    def clear(self) -> None:
        self.pixels[...] = 0

    def fill_disc(self, x: float, y: float, radius: float,
                  color: Tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        # hard edge: repeated discs at the same spot produce identical pixels
        center = (int(round(x * _ONE)), int(round(y * _ONE)))
        cv2.circle(self.pixels, center, int(round(radius * _ONE)), color,
                   thickness=-1, lineType=cv2.LINE_8, shift=_SHIFT)

    def composite(self, src: "RasterSurface", mode: CompositeMode = CompositeMode.OVER,
                  at: Tuple[int, int] = (0, 0)) -> None:
        ox, oy = at
        # clip source rect to destination
        dx0, dy0 = max(0, ox), max(0, oy)
        dx1 = min(self.width, ox + src.width)
        dy1 = min(self.height, oy + src.height)

        if dx0 >= dx1 or dy0 >= dy1:
            if mode == CompositeMode.KEEP_OVERLAP:
                self.clear()
            return

        if mode == CompositeMode.KEEP_OVERLAP:
            # destination outside the source rect has nothing to overlap with
            self.pixels[:dy0] = 0
            self.pixels[dy1:] = 0
            self.pixels[dy0:dy1, :dx0] = 0
            self.pixels[dy0:dy1, dx1:] = 0

        d = self.pixels[dy0:dy1, dx0:dx1]
        s = src.pixels[dy0 - oy:dy1 - oy, dx0 - ox:dx1 - ox]

        if mode == CompositeMode.OVER:
            d[...] = _over(s, d)
        elif mode == CompositeMode.KEEP_OVERLAP:
            a = (s[..., 3].astype(np.uint16) * d[..., 3] + 127) // 255
            d[..., :3] = s[..., :3]
            d[..., 3] = a.astype(np.uint8)
        elif mode == CompositeMode.UNION:
            take = s[..., 3] > d[..., 3]
            d[take] = s[take]
        else:
            raise ValueError(f"unsupported composite mode: {mode}")

    # ------------- presentation -------------
    def to_pygame(self) -> pygame.Surface:
        h, w = self.pixels.shape[:2]
        return pygame.image.frombuffer(np.ascontiguousarray(self.pixels).tobytes(),
                                       (w, h), "RGBA")


def _over(s: np.ndarray, d: np.ndarray) -> np.ndarray:
    sa = s[..., 3:4].astype(np.float32) / 255.0
    da = d[..., 3:4].astype(np.float32) / 255.0
    oa = sa + da * (1.0 - sa)
    rgb = s[..., :3] * sa + d[..., :3] * (da * (1.0 - sa))
    rgb = np.divide(rgb, oa, out=np.zeros_like(rgb), where=oa > 0)
    out = np.empty(s.shape, dtype=np.uint8)
    out[..., :3] = np.clip(np.rint(rgb), 0, 255)
    out[..., 3:4] = np.clip(np.rint(oa * 255.0), 0, 255)
    return out
