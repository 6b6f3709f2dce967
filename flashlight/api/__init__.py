from .stage_base import Stage
from .pointer import CanvasGeometry, Point
from .config import EngineConfig, RevealConfig

__all__ = ["Stage", "CanvasGeometry", "Point", "EngineConfig", "RevealConfig"]
