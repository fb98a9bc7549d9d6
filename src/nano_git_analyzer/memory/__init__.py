"""In-memory versioned repository engine."""

from .area import ContentArea
from .clock import Clock, SimulatedInstantClock, SystemClock
from .commit import CommitTags, MemoryCommit
from .repository import MemoryNanoRepo

__all__ = [
    "Clock",
    "CommitTags",
    "ContentArea",
    "MemoryCommit",
    "MemoryNanoRepo",
    "SimulatedInstantClock",
    "SystemClock",
]
