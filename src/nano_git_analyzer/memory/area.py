"""Content area: the mutable snapshot container that gets committed."""

from typing import Dict, Iterator, Mapping, MutableMapping

from ..core.constants import PATH_SEPARATOR


def to_absolute_path(path: str) -> str:
    """Normalise a repo path to the absolute ``/a/b`` form."""
    parts = [p for p in path.split(PATH_SEPARATOR) if p]
    if not parts:
        raise ValueError(f"Invalid repository path: {path!r}")
    return PATH_SEPARATOR + PATH_SEPARATOR.join(parts)


class ContentArea(MutableMapping):
    """Mapping of absolute repository paths to file bytes."""
    
    def __init__(self, content: Mapping[str, bytes] = None):
        self._content: Dict[str, bytes] = {}
        if content:
            self.update(content)
    
    def put_bytes(self, path: str, content: bytes) -> None:
        self[path] = content
    
    def get_bytes(self, path: str) -> bytes:
        return self[path]
    
    def get_string(self, path: str, encoding: str = "utf-8") -> str:
        return self[path].decode(encoding)
    
    def __getitem__(self, path: str) -> bytes:
        return self._content[to_absolute_path(path)]
    
    def __setitem__(self, path: str, content: bytes) -> None:
        if not isinstance(content, (bytes, bytearray)):
            raise TypeError(f"Content for {path!r} must be bytes, got {type(content).__name__}")
        self._content[to_absolute_path(path)] = bytes(content)
    
    def __delitem__(self, path: str) -> None:
        del self._content[to_absolute_path(path)]
    
    def __contains__(self, path) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return to_absolute_path(path) in self._content
        except ValueError:
            return False
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._content)
    
    def __len__(self) -> int:
        return len(self._content)
    
    def as_dict(self) -> Dict[str, bytes]:
        """Plain copy of the content."""
        return dict(self._content)
    
    def __repr__(self) -> str:
        return f"ContentArea({sorted(self._content)})"
