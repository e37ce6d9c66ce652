"""Classified validation failures.

Every validator raises a subclass of InputValidationError. The set is
closed: callers switch on ``kind`` to pick a user-facing message and must
abort the in-flight operation. None of these are retryable.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable classification of a validation failure."""

    INVALID_ENTRY_ID = "invalid_entry_id"
    INVALID_FILE_PATH = "invalid_file_path"
    PATH_TRAVERSAL_ATTEMPT = "path_traversal_attempt"
    INVALID_REPOSITORY_NAME = "invalid_repository_name"
    INVALID_URL = "invalid_url"
    INSECURE_URL = "insecure_url"
    INVALID_FIELD_NAME = "invalid_field_name"
    INVALID_FIELD_VALUE = "invalid_field_value"
    SQL_INJECTION_ATTEMPT = "sql_injection_attempt"
    SCRIPT_INJECTION_ATTEMPT = "script_injection_attempt"
    FILE_SIZE_TOO_LARGE = "file_size_too_large"
    INVALID_FILE_NAME = "invalid_file_name"


class InputValidationError(Exception):
    """Base class for all rejected caller input."""

    kind: ErrorKind

    def __init__(self, value: Any, message: str) -> None:
        self.value = value
        super().__init__(message)


class InvalidEntryId(InputValidationError):
    kind = ErrorKind.INVALID_ENTRY_ID

    def __init__(self, entry_id: Any) -> None:
        super().__init__(
            entry_id,
            f"Invalid entry ID: {entry_id!r}. Entry IDs must be positive integers.",
        )


class InvalidFilePath(InputValidationError):
    kind = ErrorKind.INVALID_FILE_PATH

    def __init__(self, path: str) -> None:
        super().__init__(
            path,
            f"Invalid file path: {path!r}. "
            "Path is empty, contains invalid characters, or its directory does not exist.",
        )


class PathTraversalAttempt(InputValidationError):
    kind = ErrorKind.PATH_TRAVERSAL_ATTEMPT

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Path traversal attempt detected in: {path!r}")


class InvalidRepositoryName(InputValidationError):
    kind = ErrorKind.INVALID_REPOSITORY_NAME

    def __init__(self, name: str) -> None:
        super().__init__(
            name,
            f"Invalid repository name: {name!r}. Repository names must be alphanumeric "
            "with hyphens or underscores, 1-64 characters.",
        )


class InvalidUrl(InputValidationError):
    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str) -> None:
        super().__init__(url, f"Invalid URL: {url!r}")


class InsecureUrl(InputValidationError):
    kind = ErrorKind.INSECURE_URL

    def __init__(self, url: str) -> None:
        super().__init__(url, f"Insecure URL: {url!r}. HTTPS is required for API endpoints.")


class InvalidFieldName(InputValidationError):
    kind = ErrorKind.INVALID_FIELD_NAME

    def __init__(self, name: Any) -> None:
        super().__init__(
            name,
            f"Invalid field name: {name!r}. Field names must start with a letter and "
            "contain only alphanumeric characters, underscores, hyphens, or spaces.",
        )


class InvalidFieldValue(InputValidationError):
    """Raised for field values rejected outright (currently: too long)."""

    kind = ErrorKind.INVALID_FIELD_VALUE

    def __init__(self, value: str, reason: str) -> None:
        self.reason = reason
        super().__init__(value, f"Invalid field value: {reason}")


class SqlInjectionAttempt(InputValidationError):
    kind = ErrorKind.SQL_INJECTION_ATTEMPT

    def __init__(self, value: str) -> None:
        super().__init__(value, "SQL injection pattern detected in input")


class ScriptInjectionAttempt(InputValidationError):
    kind = ErrorKind.SCRIPT_INJECTION_ATTEMPT

    def __init__(self, value: str) -> None:
        super().__init__(value, "Script injection pattern detected in input")


class FileSizeTooLarge(InputValidationError):
    kind = ErrorKind.FILE_SIZE_TOO_LARGE

    def __init__(self, size: Any, maximum: int) -> None:
        self.size = size
        self.maximum = maximum
        super().__init__(
            size,
            f"File size {size!r} bytes exceeds maximum allowed size of {maximum} bytes",
        )


class InvalidFileName(InputValidationError):
    kind = ErrorKind.INVALID_FILE_NAME

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Invalid file name: {name!r}")
