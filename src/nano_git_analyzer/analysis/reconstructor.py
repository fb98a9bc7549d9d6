"""Recreates source commits in the in-memory repository."""

from typing import Dict, Mapping, Optional

from ..core.constants import (
    AUTHOR_EMAIL_PATH,
    AUTHOR_NAME_PATH,
    COMMIT_MESSAGE_PATH,
    COMMIT_MESSAGE_SHORT_PATH,
)
from ..exceptions import InternalConsistencyError
from ..git.models import SourceCommit
from ..logging import get_logger
from ..memory.clock import SimulatedInstantClock
from ..memory.commit import CommitTags, MemoryCommit
from ..memory.repository import MemoryNanoRepo


logger = get_logger(__name__)


def build_commit_tags(commit: SourceCommit) -> CommitTags:
    """Author and message metadata at their well-known paths."""
    return CommitTags({
        AUTHOR_NAME_PATH: commit.author_name,
        AUTHOR_EMAIL_PATH: commit.author_email,
        COMMIT_MESSAGE_PATH: commit.message,
        COMMIT_MESSAGE_SHORT_PATH: commit.short_message,
    })


class CommitReconstructor:
    """Creates one destination commit per source commit, in walk order.
    
    ``commits_by_hash`` maps source commit hashes to the commits already
    created; every parent of a commit must be in it by the time the
    commit is reconstructed.
    """
    
    def __init__(
        self,
        repo: MemoryNanoRepo,
        clock: SimulatedInstantClock,
        commits_by_hash: Optional[Dict[str, MemoryCommit]] = None
    ):
        if repo.clock is not clock:
            raise ValueError("The repository must be stamped by the reconstruction clock")
        self.repo = repo
        self.clock = clock
        self.commits_by_hash: Dict[str, MemoryCommit] = {} if commits_by_hash is None else commits_by_hash
    
    def reconstruct(self, commit: SourceCommit, snapshot: Mapping[str, bytes]) -> MemoryCommit:
        """Create the destination commit for ``commit`` and record it."""
        parents = [self._lookup_parent(parent_sha, commit) for parent_sha in commit.parents]
        
        area = self.repo.create_area()
        area.update(snapshot)
        commit_tags = build_commit_tags(commit)
        
        self.clock.set_epoch_seconds(commit.commit_time)
        if not parents:
            memory_commit = self.repo.commit(area, commit.message, commit_tags)
        elif len(parents) == 1:
            memory_commit = self.repo.commit(area, commit.message, commit_tags, first_parent=parents[0])
        else:
            memory_commit = self.repo.commit(
                area, commit.message, commit_tags,
                first_parent=parents[0],
                other_parents=parents[1:]
            )
        
        self.commits_by_hash[commit.sha] = memory_commit
        logger.debug(
            "Reconstructed commit",
            sha=commit.sha,
            parents=len(parents),
            files=len(area),
            message=commit.short_message,
        )
        return memory_commit
    
    def _lookup_parent(self, parent_sha: str, commit: SourceCommit) -> MemoryCommit:
        try:
            return self.commits_by_hash[parent_sha]
        except KeyError:
            raise InternalConsistencyError(
                f"Parent {parent_sha} of commit {commit.sha} was not reconstructed first",
                details={"commit": commit.sha, "parent": parent_sha}
            ) from None
