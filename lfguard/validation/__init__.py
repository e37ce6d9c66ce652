"""Validation layer: every caller-supplied value passes through one of these before use."""

from __future__ import annotations

from lfguard.validation.composite import validate_api_url, validate_metadata_json
from lfguard.validation.errors import (
    ErrorKind,
    FileSizeTooLarge,
    InputValidationError,
    InsecureUrl,
    InvalidEntryId,
    InvalidFieldName,
    InvalidFieldValue,
    InvalidFileName,
    InvalidFilePath,
    InvalidRepositoryName,
    InvalidUrl,
    PathTraversalAttempt,
    ScriptInjectionAttempt,
    SqlInjectionAttempt,
)
from lfguard.validation.paths import TargetPlatform, validate_file_name, validate_file_path
from lfguard.validation.scalars import (
    MAX_ENTRY_ID,
    MAX_FIELD_VALUE_LENGTH,
    MAX_FILE_SIZE,
    validate_entry_id,
    validate_field_name,
    validate_field_value,
    validate_file_size,
    validate_repository_name,
    validate_server_address,
)

__all__ = [
    "MAX_ENTRY_ID",
    "MAX_FIELD_VALUE_LENGTH",
    "MAX_FILE_SIZE",
    "ErrorKind",
    "FileSizeTooLarge",
    "InputValidationError",
    "InsecureUrl",
    "InvalidEntryId",
    "InvalidFieldName",
    "InvalidFieldValue",
    "InvalidFileName",
    "InvalidFilePath",
    "InvalidRepositoryName",
    "InvalidUrl",
    "PathTraversalAttempt",
    "ScriptInjectionAttempt",
    "SqlInjectionAttempt",
    "TargetPlatform",
    "validate_api_url",
    "validate_entry_id",
    "validate_field_name",
    "validate_field_value",
    "validate_file_name",
    "validate_file_path",
    "validate_file_size",
    "validate_metadata_json",
    "validate_repository_name",
    "validate_server_address",
]
