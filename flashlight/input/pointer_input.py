from __future__ import annotations
from typing import Callable, Optional, Tuple

import pygame

from flashlight.api.pointer import CanvasGeometry, Point
from flashlight.input.scheduler import CoalescingScheduler


class InputController:
    """
    Turns mouse motion and the first active touch into canvas-space points
    and queues at most one reveal update per frame.

    Finger events arrive normalized to [0, 1] of the window, so they are
    scaled by `viewport_size` before mapping.
    """

    def __init__(self, geometry: CanvasGeometry, viewport_size: Tuple[int, int],
                 scheduler: CoalescingScheduler, on_update: Callable[[Point], None]):
        self.geometry = geometry
        self.viewport_size = viewport_size
        self.scheduler = scheduler
        self.on_update = on_update
        self.pointer: Optional[Point] = None
        self._finger: Optional[int] = None

    def pointer_moved(self, client_x: float, client_y: float) -> None:
        target = self.geometry.to_canvas(client_x, client_y)
        self.pointer = target
        self.scheduler.schedule(lambda: self.on_update(target))

    def _finger_pos(self, event: pygame.event.Event) -> Tuple[float, float]:
        vw, vh = self.viewport_size
        return event.x * vw, event.y * vh

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True when the event was consumed (touch moves never scroll anything else)."""
        if event.type == pygame.MOUSEMOTION:
            # SDL mirrors touches as mouse events; the finger path handles those
            if getattr(event, "touch", False):
                return True
            self.pointer_moved(*event.pos)
            return False

        if event.type == pygame.FINGERDOWN:
            if self._finger is None:
                self._finger = event.finger_id
            if event.finger_id == self._finger:
                self.pointer_moved(*self._finger_pos(event))
            return True

        if event.type == pygame.FINGERMOTION:
            if event.finger_id == self._finger:
                self.pointer_moved(*self._finger_pos(event))
            return True

        if event.type == pygame.FINGERUP:
            if event.finger_id == self._finger:
                self._finger = None
            return True

        return False
