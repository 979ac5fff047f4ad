"""Error codes and exception types for local file access."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorType(Enum):
    USER_ERROR = "user_error"
    INTERNAL_ERROR = "internal_error"
    INSUFFICIENT_RESOURCES = "insufficient_resources"
    EXTERNAL = "external"


@dataclass(frozen=True)
class ErrorCode:
    """A connector-tagged error code, so callers can classify failures uniformly."""

    name: str
    code: int
    type: ErrorType


LOCAL_FILE_ERROR_CODE = ErrorCode("LOCAL_FILE_ERROR_CODE", 0x0500_0000, ErrorType.EXTERNAL)


class LocalFileError(OSError):
    """
    Raised when the filesystem refuses an operation on a data location,
    e.g. a directory listing fails with a permission error.
    """

    def __init__(self, message: str, error_code: ErrorCode = LOCAL_FILE_ERROR_CODE) -> None:
        super().__init__(message)
        self.message: str = message
        self.error_code: ErrorCode = error_code

    def __str__(self) -> str:
        return self.message


class StaleLocationError(RuntimeError):
    """A location changed on disk after it was validated (removed, or no longer a directory)."""
