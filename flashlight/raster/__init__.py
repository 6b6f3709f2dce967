from .surface import CompositeMode, RasterSurface, SurfaceUnavailableError

__all__ = ["CompositeMode", "RasterSurface", "SurfaceUnavailableError"]
