"""System-wide constants and configuration values."""

from typing import Final, Tuple

# Commit Tag Paths
AUTHOR_PATH: Final[str] = "/author"
AUTHOR_NAME_PATH: Final[str] = AUTHOR_PATH + "/name"
AUTHOR_EMAIL_PATH: Final[str] = AUTHOR_PATH + "/email"
COMMIT_MESSAGE_PATH: Final[str] = "/message"
# First paragraph of the message, suitable for a single line display
COMMIT_MESSAGE_SHORT_PATH: Final[str] = COMMIT_MESSAGE_PATH + "/short"

# Repository Path Constants
PATH_SEPARATOR: Final[str] = "/"

# Git Reference Constants
HEAD_REF: Final[str] = "HEAD"
REFS_PREFIX: Final[str] = "refs/"
HEADS_PREFIX: Final[str] = "refs/heads/"
TAGS_PREFIX: Final[str] = "refs/tags/"
REMOTES_PREFIX: Final[str] = "refs/remotes/"
SHORTENED_REF_PREFIXES: Final[Tuple[str, ...]] = (HEADS_PREFIX, TAGS_PREFIX, REMOTES_PREFIX)

# Logging Constants
LOG_LEVELS: Final[Tuple[str, ...]] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_FORMATS: Final[Tuple[str, ...]] = ("json", "console")
