"""Clocks used to stamp commits in the in-memory repository."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Union


class Clock(ABC):
    """Source of the current instant for new commits."""
    
    @abstractmethod
    def now(self) -> datetime:
        """Current instant as a timezone-aware UTC datetime."""


class SystemClock(Clock):
    """Wall-clock time."""
    
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class SimulatedInstantClock(Clock):
    """Clock whose current instant is whatever was last assigned to it.
    
    One instance belongs to a single import run; the importer pins it to
    each source commit's time right before the commit is recreated.
    """
    
    def __init__(self, now_override: datetime = None):
        self.now_override = now_override or datetime.now(timezone.utc)
    
    def now(self) -> datetime:
        return self.now_override
    
    def set_epoch_seconds(self, seconds: Union[int, float]) -> None:
        """Pin the clock to a POSIX timestamp."""
        self.now_override = datetime.fromtimestamp(seconds, tz=timezone.utc)
