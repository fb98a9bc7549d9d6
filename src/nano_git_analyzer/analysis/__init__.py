"""Import of a source repository's commit graph into the in-memory engine."""

from .analyzer import (
    AnalysisResult,
    NanoGitAnalyzer,
    create_nano_repo_from_git_path,
    create_nano_repo_from_git_repo,
    create_nano_repo_from_git_url,
    create_nano_repo_from_source,
)
from .materializer import MaterializationResult, ReferenceMaterializer
from .reconstructor import CommitReconstructor, build_commit_tags
from .resolver import ReferenceResolver
from .snapshot import SnapshotBuilder
from .walker import CommitGraphWalker

__all__ = [
    "AnalysisResult",
    "CommitGraphWalker",
    "CommitReconstructor",
    "MaterializationResult",
    "NanoGitAnalyzer",
    "ReferenceMaterializer",
    "ReferenceResolver",
    "SnapshotBuilder",
    "build_commit_tags",
    "create_nano_repo_from_git_path",
    "create_nano_repo_from_git_repo",
    "create_nano_repo_from_git_url",
    "create_nano_repo_from_source",
]
