"""Flattens a commit's tree into a path -> bytes snapshot."""

from typing import Dict

from ..exceptions import ContentReadError
from ..git.models import SourceCommit
from ..git.source import SourceRepository


class SnapshotBuilder:
    """Reads every blob under a commit's root tree."""
    
    def __init__(self, source: SourceRepository):
        self.source = source
    
    def build(self, commit: SourceCommit) -> Dict[str, bytes]:
        """Full-tree snapshot of ``commit``; no partial result on failure."""
        snapshot = {}
        try:
            for path, blob_id in self.source.iter_tree(commit.tree):
                snapshot[path] = self.source.read_blob(blob_id)
        except ContentReadError as e:
            raise ContentReadError(
                f"Failed to build snapshot for commit {commit.sha}",
                details={"commit": commit.sha, "tree": commit.tree},
                cause=e
            )
        return snapshot
