"""Loads a whole source repository into an in-memory nano repository."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping

import structlog
from git import Repo

from ..exceptions import NanoGitAnalyzerError
from ..git.repository import GitSourceRepository, RepositoryManager
from ..git.source import SourceRepository
from ..logging import get_logger
from ..memory.clock import SimulatedInstantClock
from ..memory.commit import MemoryCommit
from ..memory.repository import MemoryNanoRepo
from .materializer import ReferenceMaterializer
from .reconstructor import CommitReconstructor
from .resolver import ReferenceResolver
from .snapshot import SnapshotBuilder
from .walker import CommitGraphWalker


logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one import run."""
    repo: MemoryNanoRepo
    commits_by_hash: Mapping[str, MemoryCommit]  # Read-only view of the run's identity map
    branches: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    skipped_references: List[str] = field(default_factory=list)
    
    @property
    def commit_count(self) -> int:
        return len(self.commits_by_hash)


class NanoGitAnalyzer:
    """Reconstructs the full commit graph, branches and tags of a source repository.
    
    Each call to :meth:`analyze` uses its own clock, destination repository
    and identity map, so runs never interfere with each other.
    """
    
    def analyze(self, source: SourceRepository) -> AnalysisResult:
        """Import ``source``. The caller keeps ownership of the source handle."""
        clock = SimulatedInstantClock()
        repo = MemoryNanoRepo(clock=clock)
        commits_by_hash: Dict[str, MemoryCommit] = {}
        
        resolver = ReferenceResolver(source)
        snapshot_builder = SnapshotBuilder(source)
        reconstructor = CommitReconstructor(repo, clock, commits_by_hash)
        
        with structlog.contextvars.bound_contextvars(source=type(source).__name__):
            current_sha = None
            try:
                references = source.list_references()
                start_commits = resolver.resolve_starting_points(references)
                logger.info(
                    "Analyzing repository",
                    references=len(references),
                    starting_points=len(start_commits),
                )
                
                for commit in CommitGraphWalker(source, start_commits):
                    current_sha = commit.sha
                    snapshot = snapshot_builder.build(commit)
                    reconstructor.reconstruct(commit, snapshot)
                current_sha = None
                
                materialized = ReferenceMaterializer(source, repo, commits_by_hash, resolver).materialize()
            except NanoGitAnalyzerError as e:
                logger.error("Repository analysis failed", commit=current_sha, error=str(e))
                raise
        
        logger.info(
            "Repository analysis completed",
            commits=len(commits_by_hash),
            branches=len(materialized.branches),
            tags=len(materialized.tags),
            skipped_references=len(materialized.skipped),
        )
        return AnalysisResult(
            repo=repo,
            commits_by_hash=MappingProxyType(commits_by_hash),
            branches=materialized.branches,
            tags=materialized.tags,
            skipped_references=materialized.skipped,
        )


def create_nano_repo_from_source(source: SourceRepository) -> MemoryNanoRepo:
    """In-memory repository for an already open source; the caller closes it."""
    return NanoGitAnalyzer().analyze(source).repo


def create_nano_repo_from_git_repo(repo: Repo) -> MemoryNanoRepo:
    """In-memory repository for an already open GitPython repository; the caller closes it."""
    return create_nano_repo_from_source(GitSourceRepository.from_repo(repo))


def create_nano_repo_from_git_path(path: str) -> MemoryNanoRepo:
    """Open the git repository at ``path``, import it and close it again."""
    with GitSourceRepository(path) as source:
        return create_nano_repo_from_source(source)


def create_nano_repo_from_git_url(url: str, directory: str) -> MemoryNanoRepo:
    """Clone ``url`` into ``directory``, import it and close it again."""
    with RepositoryManager().clone_repository(url, directory) as source:
        return create_nano_repo_from_source(source)
