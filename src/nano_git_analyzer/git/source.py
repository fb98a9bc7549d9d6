"""Read-only capability set every source repository backend provides."""

from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from .models import SourceCommit, SourceReference


class SourceRepository(ABC):
    """Narrow read-only view over a version-control object store.
    
    The analyzer only needs to enumerate and peel references, parse
    commits, list the blobs under a tree and read blob bytes, so any
    backend that can do those (a real git repository, a synthetic
    fixture) can be imported.
    """
    
    @abstractmethod
    def list_references(self) -> List[SourceReference]:
        """All references usable as walk starting points."""
    
    @abstractmethod
    def list_branches(self) -> List[SourceReference]:
        """Branch references (refs/heads/*)."""
    
    @abstractmethod
    def list_tags(self) -> List[SourceReference]:
        """Tag references (refs/tags/*)."""
    
    @abstractmethod
    def peel(self, reference: SourceReference) -> SourceReference:
        """Return the reference with its peeled target resolved.
        
        ``peeled_target`` stays ``None`` when the target is not an
        annotated tag object.
        """
    
    @abstractmethod
    def parse_commit(self, object_id: str) -> SourceCommit:
        """Interpret an object id as a commit.
        
        Raises MissingObjectError or IncorrectObjectTypeError.
        """
    
    @abstractmethod
    def iter_tree(self, tree_id: str) -> Iterator[Tuple[str, str]]:
        """Yield ``(path, blob_id)`` for every blob under the tree, recursively."""
    
    @abstractmethod
    def read_blob(self, blob_id: str) -> bytes:
        """Raw bytes of a blob. Raises ContentReadError."""
    
    def close(self) -> None:
        """Release any resources held by the backend."""
    
    def __enter__(self) -> "SourceRepository":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
