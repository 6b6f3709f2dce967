from .text_mask import ColoredTextLayer, TextMask, TextMaskGenerator
from .accumulator import RevealAccumulator
from .completion import CompletionDetector
from .compositor import CompositorRenderer
from .widget import FlashlightReveal, RevealState

__all__ = [
    "ColoredTextLayer",
    "TextMask",
    "TextMaskGenerator",
    "RevealAccumulator",
    "CompletionDetector",
    "CompositorRenderer",
    "FlashlightReveal",
    "RevealState",
]
