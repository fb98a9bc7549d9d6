"""Configuration management for the nano git analyzer."""

import tempfile
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .core.constants import LOG_FORMATS, LOG_LEVELS


class AppConfig(BaseSettings):
    """Application configuration settings."""
    
    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate the log level name."""
        if v.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {v}", details={"allowed": list(LOG_LEVELS)})
        return v.upper()
    
    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Validate the log renderer name."""
        if v.lower() not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {v}", details={"allowed": list(LOG_FORMATS)})
        return v.lower()


class GitConfig(BaseSettings):
    """Source repository access settings."""
    
    clone_base_path: Path = Field(
        default=Path(tempfile.gettempdir()) / "nano_git_analyzer_repos",
        alias="GIT_CLONE_BASE_PATH"
    )
    # Whether refs/remotes/* are used as walk starting points
    include_remote_refs: bool = Field(default=True, alias="GIT_INCLUDE_REMOTE_REFS")
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )


class Config:
    """Main configuration class."""
    
    def __init__(self) -> None:
        self.app = AppConfig()
        self.git = GitConfig()
    
    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment and .env file."""
        return cls()


# Global configuration instance
config = Config.load()
