"""Custom exceptions for the nano git analyzer."""

from typing import Any, Dict, Optional


class NanoGitAnalyzerError(Exception):
    """Base exception for nano git analyzer errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """Initialize with message, optional details, and cause."""
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause
        
        # Set the cause for proper exception chaining
        if cause is not None:
            self.__cause__ = cause
        
    def __str__(self) -> str:
        """String representation with details."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message
    
    @classmethod
    def from_exception(cls, message: str, cause: Exception, details: Optional[Dict[str, Any]] = None):
        """Create exception with proper chaining from another exception."""
        return cls(message, details, cause)


class SourceAccessError(NanoGitAnalyzerError):
    """Exception raised when the source repository cannot be opened or read."""
    pass


class ReferenceResolutionError(NanoGitAnalyzerError):
    """Exception raised when an object id cannot be interpreted as a commit."""
    pass


class MissingObjectError(ReferenceResolutionError):
    """The object does not exist in the source repository."""
    pass


class IncorrectObjectTypeError(ReferenceResolutionError):
    """The object exists but is not a commit (e.g. a tree or a blob)."""
    pass


class ContentReadError(NanoGitAnalyzerError):
    """Exception raised when blob content cannot be read."""
    pass


class InternalConsistencyError(NanoGitAnalyzerError):
    """A parent commit was not reconstructed before its child."""
    pass


class ConfigurationError(NanoGitAnalyzerError):
    """Exception raised for configuration-related errors."""
    pass
