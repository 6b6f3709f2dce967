from __future__ import annotations

import pygame

from flashlight.app.context import Context


class Stage:
    """
    Base interface stages should implement.

    A stage runs until it sets `finished`; the loop then hands control back
    to whatever comes next.
    """

    finished: bool = False

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the stage module loads."""
        ...

    def on_update(self, dt_ms: float) -> None:
        """Called every frame; dt_ms is milliseconds elapsed."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your stage to the provided surface."""
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Optional: Handle pygame events (pointer, keyboard, etc.)."""
        ...

    def on_unload(self) -> None:
        """Optional: cleanup when the stage exits."""
        ...
