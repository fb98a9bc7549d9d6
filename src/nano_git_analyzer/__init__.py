"""Loads git repositories into in-memory nano version control repositories."""

__version__ = "0.1.0"

# Import main components
from .analysis import (
    AnalysisResult,
    NanoGitAnalyzer,
    create_nano_repo_from_git_path,
    create_nano_repo_from_git_repo,
    create_nano_repo_from_git_url,
    create_nano_repo_from_source,
)
from .config import Config
from .logging import get_logger
from .memory import MemoryNanoRepo

__all__ = [
    "AnalysisResult",
    "Config",
    "MemoryNanoRepo",
    "NanoGitAnalyzer",
    "create_nano_repo_from_git_path",
    "create_nano_repo_from_git_repo",
    "create_nano_repo_from_git_url",
    "create_nano_repo_from_source",
    "get_logger",
]
