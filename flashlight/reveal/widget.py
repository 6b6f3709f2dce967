from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Optional, Tuple

import pygame

from flashlight.api.config import RevealConfig
from flashlight.api.pointer import CanvasGeometry, Point
from flashlight.input.pointer_input import InputController
from flashlight.input.scheduler import CoalescingScheduler
from flashlight.raster.surface import RasterSurface, SurfaceUnavailableError
from flashlight.reveal.accumulator import RevealAccumulator
from flashlight.reveal.completion import CompletionDetector
from flashlight.reveal.compositor import CompositorRenderer
from flashlight.reveal.text_mask import ColoredTextLayer, TextMask, TextMaskGenerator

logger = logging.getLogger(__name__)


class RevealState(Enum):
    NotRevealed = 1
    Revealed = 2


class FlashlightReveal:
    """
    A hidden message uncovered by sweeping the pointer over it.

    Lifecycle: construct, `mount()` once the container size is known, feed
    pointer events to `handle_event()`, call `tick()` once per frame, read
    `canvas` to present. `on_complete` fires exactly once, when enough of the
    text has been uncovered; after that the frame is frozen and input is
    ignored.

    If no surface can be created the widget is `degraded`: `on_degraded`
    gets the reason and every operation does nothing.
    """

    def __init__(self, message: str, on_complete: Callable[[], None],
                 cfg: Optional[RevealConfig] = None,
                 on_degraded: Optional[Callable[[str], None]] = None):
        self.message = message
        self.cfg = cfg or RevealConfig()
        self._on_complete = on_complete
        self._on_degraded = on_degraded

        self.state = RevealState.NotRevealed
        self.degraded: Optional[str] = None
        self.scheduler = CoalescingScheduler()
        self.generator = TextMaskGenerator(self.cfg)

        self.mask: Optional[TextMask] = None
        self.colored: Optional[ColoredTextLayer] = None
        self.accumulator: Optional[RevealAccumulator] = None
        self.detector: Optional[CompletionDetector] = None
        self.compositor: Optional[CompositorRenderer] = None
        self.input: Optional[InputController] = None
        self.canvas: Optional[RasterSurface] = None

    # ------------- lifecycle -------------
    @property
    def ready(self) -> bool:
        return self.compositor is not None

    @property
    def revealed(self) -> bool:
        return self.state == RevealState.Revealed

    def mount(self, container_size: Tuple[int, int], pixel_density: float = 1.0,
              origin: Tuple[float, float] = (0.0, 0.0),
              viewport_size: Optional[Tuple[int, int]] = None) -> bool:
        """Build the bitmaps for a container. Blocks at most the font-load timeout."""
        cfg = self.cfg
        try:
            mask, colored = self.generator.generate(self.message, container_size, pixel_density)
            canvas = RasterSurface(*mask.size)
        except SurfaceUnavailableError as exc:
            self._degrade(str(exc))
            return False

        self.mask, self.colored, self.canvas = mask, colored, canvas
        self.accumulator = RevealAccumulator(mask, cfg.alpha_threshold)
        self.detector = CompletionDetector(mask, self.accumulator,
                                           threshold=cfg.reveal_threshold,
                                           alpha_threshold=cfg.alpha_threshold,
                                           incremental=cfg.incremental_progress)
        self.detector.on_complete(self._revealed)
        self.compositor = CompositorRenderer(canvas, self.accumulator, colored,
                                             self.detector, cfg)

        geometry = CanvasGeometry.for_container(container_size, pixel_density, origin)
        self.input = InputController(geometry, viewport_size or container_size,
                                     self.scheduler, self.update)
        self.compositor.render()
        return True

    def unmount(self) -> None:
        self.scheduler.cancel()
        self.mask = self.colored = self.canvas = None
        self.accumulator = self.detector = self.compositor = None
        self.input = None

    def _degrade(self, reason: str) -> None:
        if self.degraded is not None:
            return
        self.degraded = reason
        logger.warning("flashlight reveal unavailable: %s", reason)
        if self._on_degraded is not None:
            self._on_degraded(reason)

    def _revealed(self) -> None:
        self.state = RevealState.Revealed
        self.scheduler.cancel()
        self.compositor.freeze()
        self._on_complete()

    # ------------- input / frame -------------
    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.ready or self.revealed:
            return False
        return self.input.handle_event(event)

    def pointer_moved(self, client_x: float, client_y: float) -> None:
        if self.ready and not self.revealed:
            self.input.pointer_moved(client_x, client_y)

    def tick(self) -> bool:
        """Run the pending reveal update, if any. Call once per frame."""
        if not self.ready:
            return False
        return self.scheduler.run_pending()

    def update(self, pointer: Point) -> None:
        if not self.ready or self.revealed:
            return
        gained = self.accumulator.stamp(pointer.x, pointer.y, self.cfg.flashlight_radius)
        self.detector.record(gained)
        self.detector.check()
        self.compositor.render(pointer)

    def progress(self) -> Optional[float]:
        if not self.ready:
            return None
        return self.detector.progress()
