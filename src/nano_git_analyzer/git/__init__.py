"""Source repository access."""

from .fixture import InMemorySourceRepository
from .models import SourceCommit, SourceReference, TreeEntry, short_message, shorten_ref_name
from .repository import GitSourceRepository, RepositoryManager
from .source import SourceRepository

__all__ = [
    "GitSourceRepository",
    "InMemorySourceRepository",
    "RepositoryManager",
    "SourceCommit",
    "SourceReference",
    "SourceRepository",
    "TreeEntry",
    "short_message",
    "shorten_ref_name",
]
