"""Per-operation input guard for the repository API client.

Maps every client operation to the validator each of its parameters must
pass before a URL, file path or request body is built from it. The client
calls guard_request() at the top of each operation and uses only the
returned values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import structlog

from lfguard.validation import (
    InputValidationError,
    TargetPlatform,
    validate_entry_id,
    validate_field_name,
    validate_file_name,
    validate_file_path,
    validate_file_size,
    validate_metadata_json,
    validate_repository_name,
    validate_server_address,
)

logger = structlog.get_logger()


class UnknownOperation(Exception):
    """Raised when guard_request() is called for an operation it has no rules for."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"No input rules for operation {operation!r}")


class MissingParameter(Exception):
    """Raised when a required parameter is absent or None."""

    def __init__(self, operation: str, field: str) -> None:
        self.operation = operation
        self.field = field
        super().__init__(f"Operation {operation!r} requires parameter {field!r}")


@dataclass(frozen=True)
class FieldRule:
    """How one operation parameter is validated."""

    validator: Callable[..., Any]
    required: bool = True
    platform_aware: bool = False


_ENTRY_ID = FieldRule(validate_entry_id)
_OPTIONAL_ENTRY_ID = FieldRule(validate_entry_id, required=False)
_FILE_NAME = FieldRule(validate_file_name, platform_aware=True)
_OPTIONAL_FILE_NAME = FieldRule(validate_file_name, required=False, platform_aware=True)

OPERATION_FIELDS: dict[str, dict[str, FieldRule]] = {
    "authenticate": {
        "address": FieldRule(validate_server_address),
        "repository": FieldRule(validate_repository_name),
    },
    "import": {
        "file_path": FieldRule(validate_file_path),
        "file_name": _FILE_NAME,
        "root_id": _ENTRY_ID,
    },
    "upload": {"file_size": FieldRule(validate_file_size)},
    "export": {
        "entry_id": _ENTRY_ID,
        "file_path": FieldRule(validate_file_path),
    },
    "get": {"root_id": _ENTRY_ID},
    "edoc_head": {"root_id": _ENTRY_ID},
    "list": {"root_id": _ENTRY_ID},
    "get_fields": {"root_id": _ENTRY_ID},
    "get_field": {"root_id": _ENTRY_ID, "field_id": _ENTRY_ID},
    "delete": {"root_id": _ENTRY_ID},
    "patch": {
        "root_id": _ENTRY_ID,
        "parent_id": _OPTIONAL_ENTRY_ID,
        "new_name": _OPTIONAL_FILE_NAME,
    },
    "copy": {
        "entry_id": _ENTRY_ID,
        "target_folder_id": _ENTRY_ID,
        "new_name": _OPTIONAL_FILE_NAME,
    },
    "get_metadata": {"entry_id": _ENTRY_ID},
    "update_metadata": {
        "entry_id": _ENTRY_ID,
        "metadata": FieldRule(validate_metadata_json),
    },
    "get_template": {"entry_id": _ENTRY_ID},
    "set_template": {
        "entry_id": _ENTRY_ID,
        "template_name": FieldRule(validate_field_name),
    },
    "remove_template": {"entry_id": _ENTRY_ID},
    "get_tags": {"entry_id": _ENTRY_ID},
    "set_tags": {"entry_id": _ENTRY_ID},
    "get_links": {"entry_id": _ENTRY_ID},
}


def guard_request(
    operation: str,
    params: dict[str, Any],
    platform: TargetPlatform = TargetPlatform.POSIX,
) -> dict[str, Any]:
    """Validate every guarded parameter of an operation call.

    Parameters without a rule are passed through unchanged. Optional
    parameters may be missing or None. Validation stops at the first
    failing parameter.

    Args:
        operation: Client operation name, e.g. ``"import"``.
        params: Raw caller-supplied parameters.
        platform: Target platform for file name rules.

    Returns:
        A new dict with validated values in place of the raw ones.

    Raises:
        UnknownOperation: If the operation has no rules.
        MissingParameter: If a required parameter is missing.
        InputValidationError: The first validation failure.
    """
    rules = OPERATION_FIELDS.get(operation)
    if rules is None:
        raise UnknownOperation(operation)

    validated = dict(params)
    for field, rule in rules.items():
        value = params.get(field)
        if value is None:
            if rule.required:
                raise MissingParameter(operation, field)
            continue

        try:
            if rule.platform_aware:
                validated[field] = rule.validator(value, platform)
            else:
                validated[field] = rule.validator(value)
        except InputValidationError as e:
            logger.warning(
                "request_rejected",
                operation=operation,
                field=field,
                kind=e.kind.value,
            )
            raise

    return validated
