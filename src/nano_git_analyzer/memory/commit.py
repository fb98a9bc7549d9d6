"""Immutable commits of the in-memory repository."""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple


class CommitTags(Mapping):
    """Read-only metadata attached to a commit, keyed by logical path."""
    
    def __init__(self, tags: Mapping[str, str] = None):
        self._tags: Dict[str, str] = dict(tags or {})
    
    def and_tag(self, path: str, value: str) -> "CommitTags":
        """Copy of these tags with one more entry."""
        tags = dict(self._tags)
        tags[path] = value
        return CommitTags(tags)
    
    def __getitem__(self, path: str) -> str:
        return self._tags[path]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)
    
    def __len__(self) -> int:
        return len(self._tags)
    
    def __repr__(self) -> str:
        return f"CommitTags({self._tags!r})"


@dataclass(frozen=True, eq=False)
class MemoryCommit:
    """A commit in the in-memory repository. Compared by identity."""
    snapshot: Mapping[str, bytes]
    timestamp: datetime
    message: str
    commit_tags: CommitTags = field(default_factory=CommitTags)
    first_parent: Optional["MemoryCommit"] = None
    other_parents: Tuple["MemoryCommit", ...] = ()
    
    def __post_init__(self):
        if self.other_parents and self.first_parent is None:
            raise ValueError("A commit with other parents needs a first parent")
        object.__setattr__(self, "snapshot", MappingProxyType(dict(self.snapshot)))
        object.__setattr__(self, "other_parents", tuple(self.other_parents))
    
    @property
    def parents(self) -> Tuple["MemoryCommit", ...]:
        """First parent followed by the other parents."""
        if self.first_parent is None:
            return ()
        return (self.first_parent,) + self.other_parents
    
    @property
    def is_root(self) -> bool:
        return self.first_parent is None
    
    @property
    def is_merge(self) -> bool:
        return bool(self.other_parents)
    
    def __repr__(self) -> str:
        return (
            f"MemoryCommit(timestamp={self.timestamp.isoformat()}, "
            f"parents={len(self.parents)}, files={len(self.snapshot)})"
        )
