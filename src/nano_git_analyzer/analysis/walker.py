"""Topological walk over the source commit graph."""

import heapq
from collections import defaultdict, deque
from typing import Dict, Iterable, Iterator, List

from ..exceptions import InternalConsistencyError, ReferenceResolutionError, SourceAccessError
from ..git.models import SourceCommit
from ..git.source import SourceRepository
from ..logging import get_logger


logger = get_logger(__name__)


class CommitGraphWalker:
    """Yields every commit reachable from the starting commits, parents first.
    
    The order is computed newest-first: a commit becomes eligible once all
    of its reachable children have been taken, and among eligible commits
    the one with the latest commit time goes first (discovery order breaks
    ties). The result is then reversed, so emission runs oldest to newest
    and no commit is ever yielded before one of its ancestors.
    
    The walk is single-pass; iterating a walker a second time raises
    ``RuntimeError``.
    """
    
    def __init__(self, source: SourceRepository, start_commits: Iterable[SourceCommit]):
        self.source = source
        self._start_commits = list(start_commits)
        self._started = False
    
    def __iter__(self) -> Iterator[SourceCommit]:
        if self._started:
            raise RuntimeError("A commit graph walk cannot be restarted")
        self._started = True
        return self._walk()
    
    def _walk(self) -> Iterator[SourceCommit]:
        newest_first = self._order_newest_first()
        for commit in reversed(newest_first):
            yield commit
    
    def _order_newest_first(self) -> List[SourceCommit]:
        commits: Dict[str, SourceCommit] = {}
        discovery: Dict[str, int] = {}
        child_counts: Dict[str, int] = defaultdict(int)
        
        pending = deque()
        for commit in self._start_commits:
            if commit.sha not in commits:
                commits[commit.sha] = commit
                discovery[commit.sha] = len(discovery)
                pending.append(commit)
        
        while pending:
            commit = pending.popleft()
            for parent_sha in commit.parents:
                child_counts[parent_sha] += 1
                if parent_sha not in commits:
                    commits[parent_sha] = self._parse_parent(parent_sha, commit)
                    discovery[parent_sha] = len(discovery)
                    pending.append(commits[parent_sha])
        
        logger.debug("Discovered reachable commits", count=len(commits))
        
        ready = [
            (-commit.commit_time, discovery[sha], sha)
            for sha, commit in commits.items()
            if child_counts[sha] == 0
        ]
        heapq.heapify(ready)
        
        ordered = []
        while ready:
            _, _, sha = heapq.heappop(ready)
            commit = commits[sha]
            ordered.append(commit)
            for parent_sha in commit.parents:
                child_counts[parent_sha] -= 1
                if child_counts[parent_sha] == 0:
                    parent = commits[parent_sha]
                    heapq.heappush(ready, (-parent.commit_time, discovery[parent_sha], parent_sha))
        
        if len(ordered) != len(commits):
            raise InternalConsistencyError(
                "Commit graph contains a cycle",
                details={"reachable": len(commits), "ordered": len(ordered)}
            )
        return ordered
    
    def _parse_parent(self, parent_sha: str, child: SourceCommit) -> SourceCommit:
        try:
            return self.source.parse_commit(parent_sha)
        except ReferenceResolutionError as e:
            raise SourceAccessError.from_exception(
                f"Parent commit {parent_sha} of {child.sha} cannot be read",
                e,
                details={"commit": child.sha, "parent": parent_sha}
            )
