"""In-memory versioned repository that receives the imported history."""

from typing import Dict, Iterable, List, Optional

from ..logging import get_logger
from .area import ContentArea
from .clock import Clock, SystemClock
from .commit import CommitTags, MemoryCommit


logger = get_logger(__name__)


class MemoryNanoRepo:
    """Stores commits, branches and tags in memory.
    
    Commits are stamped with ``clock.now()`` at creation time, so a
    caller that controls the clock controls the recorded timestamps.
    """
    
    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self._commits: List[MemoryCommit] = []
        self._commit_ids = set()
        self._branches: Dict[str, MemoryCommit] = {}
        self._tags: Dict[str, MemoryCommit] = {}
    
    def create_area(self) -> ContentArea:
        """Create an empty content area."""
        return ContentArea()
    
    def commit(
        self,
        area: ContentArea,
        message: str,
        commit_tags: Optional[CommitTags] = None,
        first_parent: Optional[MemoryCommit] = None,
        other_parents: Optional[Iterable[MemoryCommit]] = None,
    ) -> MemoryCommit:
        """Commit a snapshot of ``area``.
        
        With no parents this is a root commit; ``other_parents`` makes it
        a merge commit and requires ``first_parent``.
        """
        other_parents = tuple(other_parents or ())
        for parent in ((first_parent,) if first_parent else ()) + other_parents:
            self._check_owned(parent)
        
        commit = MemoryCommit(
            snapshot=area.as_dict(),
            timestamp=self.clock.now(),
            message=message,
            commit_tags=commit_tags or CommitTags(),
            first_parent=first_parent,
            other_parents=other_parents,
        )
        self._commits.append(commit)
        self._commit_ids.add(id(commit))
        return commit
    
    def checkout(self, commit: MemoryCommit) -> ContentArea:
        """Fresh area holding the snapshot of ``commit``."""
        self._check_owned(commit)
        return ContentArea(commit.snapshot)
    
    def get_commits(self) -> List[MemoryCommit]:
        """All commits in creation order."""
        return list(self._commits)
    
    def __len__(self) -> int:
        return len(self._commits)
    
    def create_branch_at_commit(self, commit: MemoryCommit, branch_name: str) -> None:
        self._check_owned(commit)
        if branch_name in self._branches:
            logger.debug("Moving existing branch", branch=branch_name)
        self._branches[branch_name] = commit
    
    def get_branch_names(self) -> List[str]:
        return sorted(self._branches)
    
    def get_latest_commit_for_branch(self, branch_name: str) -> Optional[MemoryCommit]:
        return self._branches.get(branch_name)
    
    def remove_branch(self, branch_name: str) -> None:
        self._branches.pop(branch_name, None)
    
    def tag_commit(self, commit: MemoryCommit, tag_name: str) -> None:
        self._check_owned(commit)
        if tag_name in self._tags:
            logger.debug("Moving existing tag", tag=tag_name)
        self._tags[tag_name] = commit
    
    def get_tag_names(self) -> List[str]:
        return sorted(self._tags)
    
    def get_commit_for_tag(self, tag_name: str) -> Optional[MemoryCommit]:
        return self._tags.get(tag_name)
    
    def remove_tag(self, tag_name: str) -> None:
        self._tags.pop(tag_name, None)
    
    def _check_owned(self, commit: MemoryCommit) -> None:
        if commit is None or id(commit) not in self._commit_ids:
            raise ValueError("Commit does not belong to this repository")
