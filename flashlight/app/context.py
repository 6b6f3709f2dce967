from __future__ import annotations
from dataclasses import dataclass
import pygame
from typing import Any, Tuple
from flashlight.api.config import EngineConfig


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    # shared with the stage, e.g. the widget's degraded reason
    resources: dict[str, Any]
    screen_size: Tuple[int, int]
