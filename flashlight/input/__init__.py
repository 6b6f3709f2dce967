from .scheduler import CoalescingScheduler
from .pointer_input import InputController

__all__ = ["CoalescingScheduler", "InputController"]
