from __future__ import annotations
from typing import Callable, Optional


class CoalescingScheduler:
    """
    Queue of one. Scheduling replaces whatever is pending; the host loop calls
    `run_pending()` once per frame, so bursts of input collapse into a single
    update carrying the latest state.
    """

    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, task: Callable[[], None]) -> bool:
        """Returns True if a pending task was replaced."""
        replaced = self._pending is not None
        self._pending = task
        return replaced

    def cancel(self) -> None:
        self._pending = None

    def run_pending(self) -> bool:
        task, self._pending = self._pending, None
        if task is None:
            return False
        task()
        return True
