from enum import Enum
from pathlib import Path


class ErrorKind(Enum):
    """what went wrong, for callers that need to branch without parsing messages."""
    INVALID_NAME = "invalid_name"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    BASE_NOT_CONFIGURED = "base_not_configured"
    MISSING_SHARED_RESOURCE = "missing_shared_resource"
    IO = "io"


class ProfileError(Exception):
    """base class for exceptions in cc-profiles."""
    kind: ErrorKind = ErrorKind.IO


class InvalidProfileNameError(ProfileError):
    """raised when a profile name fails validation."""
    kind = ErrorKind.INVALID_NAME

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid profile name '{name}': {reason}")


class ProfileExistsError(ProfileError):
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Profile "{name}" already exists.')


class ProfileNotFoundError(ProfileError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Profile "{name}" does not exist.')


class BaseNotConfiguredError(ProfileError):
    """raised when the shared ~/.claude directory has never been created."""
    kind = ErrorKind.BASE_NOT_CONFIGURED

    def __init__(self, shared_root: Path):
        self.shared_root = shared_root
        super().__init__(
            "Claude Code is not configured. "
            'Please run "claude" first to set up your main configuration.'
        )


class MissingSharedResourceError(ProfileError):
    """raised when a required shared item is absent from the shared root."""
    kind = ErrorKind.MISSING_SHARED_RESOURCE

    def __init__(self, source: Path):
        self.source = source
        super().__init__(f"Required file not found: {source}")


class FilesystemError(ProfileError):
    """raised when a file or directory operation fails underneath us."""
    kind = ErrorKind.IO

    def __init__(self, action: str, path: Path, cause: OSError):
        self.action = action
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to {action} {path}: {cause}")


class StoreWriteError(FilesystemError):
    """raised when the profiles config file cannot be written."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__("write", path, cause)
