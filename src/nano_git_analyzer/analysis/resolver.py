"""Resolves source references to the commits they designate."""

from typing import Iterable, List, Optional

from ..exceptions import ReferenceResolutionError
from ..git.models import SourceCommit, SourceReference
from ..git.source import SourceRepository
from ..logging import get_logger


logger = get_logger(__name__)


class ReferenceResolver:
    """Peels references and parses their targets as commits."""
    
    def __init__(self, source: SourceRepository):
        self.source = source
    
    def resolve_object_id(self, reference: SourceReference) -> str:
        """Object id behind any annotated tags, else the direct target."""
        if not reference.is_peeled:
            reference = self.source.peel(reference)
        return reference.peeled_target or reference.target
    
    def resolve_commit(self, reference: SourceReference) -> Optional[SourceCommit]:
        """The commit a reference designates, or ``None`` if it is not a commit."""
        object_id = self.resolve_object_id(reference)
        try:
            return self.source.parse_commit(object_id)
        except ReferenceResolutionError as e:
            logger.info(
                "Reference does not designate a commit",
                reference=reference.name,
                object_id=object_id,
                reason=e.message,
            )
            return None
    
    def resolve_starting_points(self, references: Iterable[SourceReference]) -> List[SourceCommit]:
        """Distinct commits designated by ``references``, in reference order."""
        seen = set()
        commits = []
        for reference in references:
            commit = self.resolve_commit(reference)
            if commit is not None and commit.sha not in seen:
                seen.add(commit.sha)
                commits.append(commit)
        return commits
