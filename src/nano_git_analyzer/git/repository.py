"""GitPython backed source repository."""

import shutil
from pathlib import Path
from typing import Iterator, List, Optional, Tuple
from urllib.parse import urlparse

import git
from git import Object, Repo, Tree, InvalidGitRepositoryError, NoSuchPathError, GitCommandError
from git.exc import BadName, BadObject
from git.refs.symbolic import SymbolicReference
from git.util import hex_to_bin

from ..config import config
from ..core.constants import HEAD_REF, HEADS_PREFIX, REMOTES_PREFIX, TAGS_PREFIX
from ..exceptions import (
    ContentReadError,
    IncorrectObjectTypeError,
    MissingObjectError,
    SourceAccessError,
)
from ..logging import get_logger
from .models import SourceCommit, SourceReference, short_message
from .source import SourceRepository


logger = get_logger(__name__)

_LOOKUP_ERRORS = (BadName, BadObject, ValueError)


class GitSourceRepository(SourceRepository):
    """Reads references, commits, trees and blobs of a git repository."""
    
    def __init__(self, repo_path: str, include_remote_refs: Optional[bool] = None):
        """Open an existing git repository (working tree or bare)."""
        try:
            self.repo = Repo(repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise SourceAccessError.from_exception(f"Invalid git repository: {repo_path}", e)
        
        if include_remote_refs is None:
            include_remote_refs = config.git.include_remote_refs
        self.include_remote_refs = include_remote_refs
    
    @classmethod
    def from_repo(cls, repo: Repo, include_remote_refs: Optional[bool] = None) -> "GitSourceRepository":
        """Wrap an already open GitPython repository."""
        source = cls.__new__(cls)
        source.repo = repo
        source.include_remote_refs = (
            config.git.include_remote_refs if include_remote_refs is None else include_remote_refs
        )
        return source
    
    def list_references(self) -> List[SourceReference]:
        references = []
        head = self._to_source_reference(HEAD_REF)
        if head is not None:
            references.append(head)
        
        for ref in self.repo.references:
            if not self.include_remote_refs and ref.path.startswith(REMOTES_PREFIX):
                continue
            reference = self._to_source_reference(ref.path)
            if reference is not None:
                references.append(reference)
        return references
    
    def list_branches(self) -> List[SourceReference]:
        return self._list_prefixed(HEADS_PREFIX)
    
    def list_tags(self) -> List[SourceReference]:
        return self._list_prefixed(TAGS_PREFIX)
    
    def peel(self, reference: SourceReference) -> SourceReference:
        if reference.is_peeled:
            return reference
        
        peeled_target = None
        try:
            obj = Object.new_from_sha(self.repo, hex_to_bin(reference.target))
            if obj.type == "tag":
                while obj.type == "tag":
                    obj = obj.object
                peeled_target = obj.hexsha
        except _LOOKUP_ERRORS as e:
            logger.debug("Could not peel reference", reference=reference.name, error=str(e))
        
        return reference.model_copy(update={"peeled_target": peeled_target, "is_peeled": True})
    
    def parse_commit(self, object_id: str) -> SourceCommit:
        try:
            binsha = hex_to_bin(object_id)
            # The null id is never looked up by GitPython, so it would parse as an empty commit
            if binsha == Object.NULL_BIN_SHA:
                raise ValueError("null object id")
            obj = Object.new_from_sha(self.repo, binsha)
        except _LOOKUP_ERRORS as e:
            raise MissingObjectError.from_exception(f"Object not found: {object_id}", e)

        if obj.type != "commit":
            raise IncorrectObjectTypeError(
                f"Object is not a commit: {object_id}",
                details={"type": obj.type}
            )
        
        try:
            message = obj.message
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            
            return SourceCommit(
                sha=obj.hexsha,
                parents=[p.hexsha for p in obj.parents],
                author_name=obj.author.name or "",
                author_email=obj.author.email or "",
                message=message,
                short_message=short_message(message),
                commit_time=obj.committed_date,
                tree=obj.tree.hexsha,
            )
        except (ValueError, OSError) as e:
            raise SourceAccessError.from_exception(f"Failed to read commit {object_id}", e)
    
    def iter_tree(self, tree_id: str) -> Iterator[Tuple[str, str]]:
        try:
            obj = Object.new_from_sha(self.repo, hex_to_bin(tree_id))
            if obj.type != "tree":
                raise ContentReadError(
                    f"Object is not a tree: {tree_id}",
                    details={"type": obj.type}
                )
            # Traversal needs the root path set, which lookups by id leave unset
            tree = Tree(self.repo, obj.binsha, path="")
            for item in tree.traverse():
                # Submodule gitlinks are not blobs of this repository
                if item.type == "blob":
                    yield item.path, item.hexsha
        except (BadName, BadObject, ValueError, OSError) as e:
            raise ContentReadError.from_exception(f"Failed to read tree {tree_id}", e)
    
    def read_blob(self, blob_id: str) -> bytes:
        try:
            return self.repo.odb.stream(hex_to_bin(blob_id)).read()
        except (BadName, BadObject, ValueError, OSError) as e:
            raise ContentReadError.from_exception(f"Failed to read blob {blob_id}", e)
    
    def close(self) -> None:
        self.repo.close()
    
    def _list_prefixed(self, prefix: str) -> List[SourceReference]:
        references = []
        for ref in self.repo.references:
            if ref.path.startswith(prefix):
                reference = self._to_source_reference(ref.path)
                if reference is not None:
                    references.append(reference)
        return references
    
    def _to_source_reference(self, ref_path: str) -> Optional[SourceReference]:
        """Read a reference target without touching the object database."""
        try:
            target = SymbolicReference.dereference_recursive(self.repo, ref_path)
        except ValueError:
            # Unborn HEAD or a broken symbolic reference
            logger.debug("Skipping unresolvable reference", reference=ref_path)
            return None
        return SourceReference(name=ref_path, target=target)


class RepositoryManager:
    """Opens local repositories and clones remote ones."""
    
    def __init__(self, base_path: str = None):
        """Initialize repository manager."""
        self.base_path = Path(base_path) if base_path else config.git.clone_base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
    
    def open_repository(self, path: str) -> GitSourceRepository:
        """Open an existing repository from a local path."""
        return GitSourceRepository(path)
    
    def clone_repository(self, url: str, directory: Optional[str] = None) -> GitSourceRepository:
        """Clone a repository from URL into ``directory`` (default: under the base path)."""
        if directory:
            repo_path = Path(directory)
        else:
            repo_path = self.base_path / self._extract_repo_name(url)
            # Managed clones are refreshed from scratch
            if repo_path.exists():
                shutil.rmtree(repo_path)
        
        try:
            logger.info("Cloning repository", url=url, path=str(repo_path))
            repo = git.Repo.clone_from(url, repo_path)
        except GitCommandError as e:
            raise SourceAccessError.from_exception(f"Failed to clone repository {url}", e)
        return GitSourceRepository.from_repo(repo)
    
    def _extract_repo_name(self, url: str) -> str:
        """Extract repository name from URL."""
        parsed = urlparse(url)
        path = parsed.path.strip('/')
        
        # Remove .git suffix if present
        if path.endswith('.git'):
            path = path[:-4]
        
        # Get last part of path
        return path.split('/')[-1]
