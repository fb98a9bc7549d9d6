"""Synthetic in-memory source repository.

Builds commit graphs without touching the filesystem. Object ids are
SHA-1 digests of a canonical encoding of each object, so the same
construction sequence always produces the same ids.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..core.constants import HEADS_PREFIX, PATH_SEPARATOR, TAGS_PREFIX
from ..exceptions import ContentReadError, IncorrectObjectTypeError, MissingObjectError
from .models import SourceCommit, SourceReference, TreeEntry, short_message
from .source import SourceRepository


@dataclass(frozen=True)
class _StoredObject:
    type: str
    payload: Any


def _object_id(object_type: str, body: bytes) -> str:
    header = f"{object_type} {len(body)}\0".encode()
    return hashlib.sha1(header + body).hexdigest()


class InMemorySourceRepository(SourceRepository):
    """Source repository whose objects and references live in dictionaries."""
    
    def __init__(self):
        self._objects: Dict[str, _StoredObject] = {}
        self._references: Dict[str, str] = {}
    
    def add_blob(self, content: bytes) -> str:
        """Store file content and return its id."""
        blob_id = _object_id("blob", content)
        self._objects[blob_id] = _StoredObject("blob", bytes(content))
        return blob_id
    
    def add_tree_entries(self, entries: Iterable[TreeEntry]) -> str:
        """Store a single tree level. Entries may point at missing objects."""
        entries = sorted(entries, key=lambda e: e.name)
        body = json.dumps([[e.name, e.object_id, e.is_tree] for e in entries]).encode()
        tree_id = _object_id("tree", body)
        self._objects[tree_id] = _StoredObject("tree", tuple(entries))
        return tree_id
    
    def add_tree(self, files: Mapping[str, bytes]) -> str:
        """Store a whole hierarchy from a flat ``path -> content`` mapping."""
        nested: Dict[str, Any] = {}
        for path, content in files.items():
            parts = [p for p in path.split(PATH_SEPARATOR) if p]
            if not parts:
                raise ValueError(f"Invalid file path: {path!r}")
            node = nested
            for part in parts[:-1]:
                node = node.setdefault(part, {})
                if not isinstance(node, dict):
                    raise ValueError(f"Path collides with a file: {path!r}")
            node[parts[-1]] = content
        return self._store_nested(nested)
    
    def add_commit(
        self,
        files: Optional[Mapping[str, bytes]] = None,
        parents: Iterable[str] = (),
        message: str = "",
        author_name: str = "Author",
        author_email: str = "author@example.com",
        commit_time: int = 0,
        tree: Optional[str] = None,
    ) -> str:
        """Store a commit over ``files`` (or an existing ``tree``) and return its id."""
        if tree is None:
            tree = self.add_tree(files or {})
        parents = list(parents)
        body = json.dumps({
            "tree": tree,
            "parents": parents,
            "author": [author_name, author_email],
            "time": commit_time,
            "message": message,
        }, sort_keys=True).encode()
        commit_id = _object_id("commit", body)
        self._objects[commit_id] = _StoredObject("commit", SourceCommit(
            sha=commit_id,
            parents=parents,
            author_name=author_name,
            author_email=author_email,
            message=message,
            short_message=short_message(message),
            commit_time=commit_time,
            tree=tree,
        ))
        return commit_id
    
    def add_tag_object(self, target: str, name: str, message: str = "") -> str:
        """Store an annotated tag object pointing at ``target``."""
        body = json.dumps({"object": target, "tag": name, "message": message}, sort_keys=True).encode()
        tag_id = _object_id("tag", body)
        self._objects[tag_id] = _StoredObject("tag", target)
        return tag_id
    
    def set_reference(self, name: str, target: str) -> None:
        """Point a reference (full name, e.g. refs/heads/main) at an object id."""
        self._references[name] = target
    
    def set_branch(self, name: str, target: str) -> None:
        self.set_reference(HEADS_PREFIX + name, target)
    
    def set_tag(self, name: str, target: str) -> None:
        self.set_reference(TAGS_PREFIX + name, target)
    
    def list_references(self) -> List[SourceReference]:
        return [SourceReference(name=n, target=t) for n, t in self._references.items()]
    
    def list_branches(self) -> List[SourceReference]:
        return [r for r in self.list_references() if r.name.startswith(HEADS_PREFIX)]
    
    def list_tags(self) -> List[SourceReference]:
        return [r for r in self.list_references() if r.name.startswith(TAGS_PREFIX)]
    
    def peel(self, reference: SourceReference) -> SourceReference:
        if reference.is_peeled:
            return reference
        
        peeled_target = None
        stored = self._objects.get(reference.target)
        if stored is not None and stored.type == "tag":
            target = stored.payload
            # Tags of tags are followed down to the first non-tag object
            while target in self._objects and self._objects[target].type == "tag":
                target = self._objects[target].payload
            peeled_target = target
        return reference.model_copy(update={"peeled_target": peeled_target, "is_peeled": True})
    
    def parse_commit(self, object_id: str) -> SourceCommit:
        stored = self._objects.get(object_id)
        if stored is None:
            raise MissingObjectError(f"Object not found: {object_id}")
        if stored.type != "commit":
            raise IncorrectObjectTypeError(
                f"Object is not a commit: {object_id}",
                details={"type": stored.type}
            )
        return stored.payload
    
    def iter_tree(self, tree_id: str, prefix: str = "") -> Iterator[Tuple[str, str]]:
        stored = self._objects.get(tree_id)
        if stored is None or stored.type != "tree":
            raise ContentReadError(f"Failed to read tree {tree_id}")
        for entry in stored.payload:
            path = prefix + entry.name
            if entry.is_tree:
                yield from self.iter_tree(entry.object_id, path + PATH_SEPARATOR)
            else:
                yield path, entry.object_id
    
    def read_blob(self, blob_id: str) -> bytes:
        stored = self._objects.get(blob_id)
        if stored is None or stored.type != "blob":
            raise ContentReadError(f"Failed to read blob {blob_id}")
        return stored.payload
    
    def _store_nested(self, nested: Dict[str, Any]) -> str:
        entries = []
        for name, value in nested.items():
            if isinstance(value, dict):
                entries.append(TreeEntry(name=name, object_id=self._store_nested(value), is_tree=True))
            else:
                entries.append(TreeEntry(name=name, object_id=self.add_blob(value)))
        return self.add_tree_entries(entries)
