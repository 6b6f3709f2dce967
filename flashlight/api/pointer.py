from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Point:
    x: float
    y: float


@dataclass
class CanvasGeometry:
    """
    Where the canvas sits in the viewport and how big its backing bitmap is.

    The box is in viewport (window) px; the canvas size is the internal
    resolution, normally box size * pixel density.
    """

    box_left: float
    box_top: float
    box_width: float
    box_height: float
    canvas_width: int
    canvas_height: int

    @classmethod
    def for_container(cls, size: Tuple[int, int], pixel_density: float,
                      origin: Tuple[float, float] = (0.0, 0.0)) -> "CanvasGeometry":
        w, h = size
        return cls(
            box_left=origin[0],
            box_top=origin[1],
            box_width=w,
            box_height=h,
            canvas_width=int(w * pixel_density),
            canvas_height=int(h * pixel_density),
        )

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas_width, self.canvas_height

    def to_canvas(self, client_x: float, client_y: float) -> Point:
        scale_x = self.canvas_width / self.box_width if self.box_width else 0.0
        scale_y = self.canvas_height / self.box_height if self.box_height else 0.0
        return Point((client_x - self.box_left) * scale_x,
                     (client_y - self.box_top) * scale_y)
