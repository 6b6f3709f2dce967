from __future__ import annotations
import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from flashlight.reveal.accumulator import RevealAccumulator
from flashlight.reveal.text_mask import TextMask

logger = logging.getLogger(__name__)


class CompletionDetector:
    """
    Tracks the revealed fraction of text pixels and flips `complete` once,
    the first time it reaches the threshold (inclusive).

    With `incremental=True`, `check()` uses a running count fed by `record()`
    instead of rescanning both bitmaps on every update.
    """

    def __init__(self, mask: TextMask, accumulator: RevealAccumulator,
                 threshold: float = 0.92, alpha_threshold: int = 20,
                 incremental: bool = True):
        self.mask = mask
        self.accumulator = accumulator
        self.threshold = threshold
        self.alpha_threshold = alpha_threshold
        self.incremental = incremental
        self.complete = False
        self._listeners: List[Callable[[], None]] = []

        self.text_pixels, self._revealed = self._scan()

    def on_complete(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _scan(self) -> Tuple[int, int]:
        thr = self.alpha_threshold
        text = self.mask.alpha > thr
        revealed = text & (self.accumulator.alpha > thr)
        return int(np.count_nonzero(text)), int(np.count_nonzero(revealed))

    def record(self, newly_revealed: int) -> None:
        self._revealed += newly_revealed

    def progress(self) -> Optional[float]:
        """Revealed / text pixels from a full scan; None when there is no text."""
        text, revealed = self._scan()
        if text == 0:
            return None
        return revealed / text

    def check(self) -> bool:
        if self.complete:
            return True
        if self.incremental:
            text, revealed = self.text_pixels, self._revealed
        else:
            text, revealed = self._scan()
            self._revealed = revealed
        if text == 0:
            return False
        if revealed / text >= self.threshold:
            self.complete = True
            logger.info("reveal complete (%d/%d text pixels)", revealed, text)
            for cb in self._listeners:
                cb()
        return self.complete
