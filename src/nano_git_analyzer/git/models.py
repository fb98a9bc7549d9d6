"""Data models for the source repository view."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import SHORTENED_REF_PREFIXES


class SourceReference(BaseModel):
    """A named reference in the source repository."""
    model_config = ConfigDict(frozen=True)
    
    name: str  # Full name, e.g. refs/heads/main
    target: str  # Object id the reference points at directly
    peeled_target: Optional[str] = None  # Object id behind any annotated tags
    is_peeled: bool = False
    
    @property
    def short_name(self) -> str:
        """Simple name of the reference."""
        return shorten_ref_name(self.name)


class SourceCommit(BaseModel):
    """Read-only view of a commit in the source repository."""
    model_config = ConfigDict(frozen=True)
    
    sha: str
    parents: List[str] = Field(default_factory=list)  # First parent distinguished
    author_name: str
    author_email: str
    message: str
    short_message: str
    commit_time: int  # Seconds since the epoch
    tree: str


class TreeEntry(BaseModel):
    """A single entry of a hierarchical source tree."""
    model_config = ConfigDict(frozen=True)
    
    name: str
    object_id: str
    is_tree: bool = False


def shorten_ref_name(ref_name: str) -> str:
    """Strip the well-known refs/heads/, refs/tags/ and refs/remotes/ prefixes."""
    for prefix in SHORTENED_REF_PREFIXES:
        if ref_name.startswith(prefix):
            return ref_name[len(prefix):]
    return ref_name


def short_message(message: str) -> str:
    """First paragraph of a commit message on a single line."""
    paragraph = message.split("\n\n", 1)[0]
    return " ".join(line.rstrip("\r") for line in paragraph.split("\n")).rstrip()
