"""Creates branches and tags for the reconstructed commits."""

from typing import Callable, List, Mapping

from pydantic import BaseModel, Field

from ..git.models import SourceReference
from ..git.source import SourceRepository
from ..logging import get_logger
from ..memory.commit import MemoryCommit
from ..memory.repository import MemoryNanoRepo
from .resolver import ReferenceResolver


logger = get_logger(__name__)


class MaterializationResult(BaseModel):
    """Names of the references created and skipped."""
    branches: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)  # Full reference names


class ReferenceMaterializer:
    """Mirrors source branches and tags onto the destination repository."""
    
    def __init__(
        self,
        source: SourceRepository,
        repo: MemoryNanoRepo,
        commits_by_hash: Mapping[str, MemoryCommit],
        resolver: ReferenceResolver = None
    ):
        self.source = source
        self.repo = repo
        self.commits_by_hash = commits_by_hash
        self.resolver = resolver or ReferenceResolver(source)
    
    def materialize(self) -> MaterializationResult:
        """Create every branch, then every tag, that designates a known commit."""
        result = MaterializationResult()
        result.branches = self._materialize(
            self.source.list_branches(), self.repo.create_branch_at_commit, result.skipped
        )
        result.tags = self._materialize(
            self.source.list_tags(), self.repo.tag_commit, result.skipped
        )
        return result
    
    def _materialize(
        self,
        references: List[SourceReference],
        create: Callable[[MemoryCommit, str], None],
        skipped: List[str]
    ) -> List[str]:
        created = []
        for reference in references:
            commit_hash = self.resolver.resolve_object_id(reference)
            memory_commit = self.commits_by_hash.get(commit_hash)
            if memory_commit is None:
                logger.info("Skipping reference without a reconstructed commit", reference=reference.name)
                skipped.append(reference.name)
                continue
            
            create(memory_commit, reference.short_name)
            created.append(reference.short_name)
        return created
