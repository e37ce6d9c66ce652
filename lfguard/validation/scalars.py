"""Validators for identifiers, names, byte counts and field values.

Each validator returns the accepted value or raises the first violated
rule. Rules are checked in a fixed order: emptiness and length, then
injection patterns, then shape.
"""

from __future__ import annotations

import re

from lfguard.validation.errors import (
    FileSizeTooLarge,
    InvalidEntryId,
    InvalidFieldName,
    InvalidFieldValue,
    InvalidRepositoryName,
    InvalidUrl,
    ScriptInjectionAttempt,
    SqlInjectionAttempt,
)
from lfguard.validation.patterns import PATTERNS

# Half of i64::MAX; the upper half is reserved as overflow headroom.
MAX_ENTRY_ID = (2**63 - 1) // 2

MAX_FILE_SIZE = 100 * 1024 * 1024
MAX_FIELD_VALUE_LENGTH = 10 * 1024
MAX_REPOSITORY_NAME_LENGTH = 64
MAX_SERVER_ADDRESS_LENGTH = 253
MAX_LABEL_LENGTH = 63
MAX_FIELD_NAME_LENGTH = 128

# Runs of characters that get doubled when escaping a field value
_ESCAPE_RUN_RE = re.compile(r"'+|\\+")


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_entry_id(entry_id: int) -> int:
    """Validate a repository entry identifier.

    Args:
        entry_id: Caller-supplied entry, folder or field ID.

    Returns:
        The same ID.

    Raises:
        InvalidEntryId: If the ID is not an integer in ``1..MAX_ENTRY_ID``.
    """
    if not _is_integer(entry_id):
        raise InvalidEntryId(entry_id)
    if entry_id <= 0 or entry_id > MAX_ENTRY_ID:
        raise InvalidEntryId(entry_id)
    return entry_id


def validate_file_size(size: int) -> int:
    """Check a byte count against the upload ceiling.

    Raises:
        FileSizeTooLarge: If ``size`` is above MAX_FILE_SIZE, or is not a
            non-negative integer.
    """
    if not _is_integer(size) or size < 0 or size > MAX_FILE_SIZE:
        raise FileSizeTooLarge(size, MAX_FILE_SIZE)
    return size


def validate_repository_name(name: str) -> str:
    """Validate a repository identifier used in API URLs.

    Raises:
        InvalidRepositoryName: If empty, too long, or badly shaped.
        SqlInjectionAttempt: If the name contains injection keywords or
            metacharacters.
    """
    if not isinstance(name, str) or not name or len(name) > MAX_REPOSITORY_NAME_LENGTH:
        raise InvalidRepositoryName(name)
    if PATTERNS.has_sql_injection(name):
        raise SqlInjectionAttempt(name)
    if not PATTERNS.repository_name.fullmatch(name):
        raise InvalidRepositoryName(name)
    return name


def validate_server_address(address: str) -> str:
    """Validate an API server hostname or FQDN.

    Raises:
        InvalidUrl: If empty, longer than 253 characters, badly shaped, or
            any dot-separated label is empty, longer than 63 characters, or
            starts or ends with a hyphen.
        SqlInjectionAttempt: On an injection pattern match.
    """
    if not isinstance(address, str) or not address or len(address) > MAX_SERVER_ADDRESS_LENGTH:
        raise InvalidUrl(address)
    if PATTERNS.has_sql_injection(address):
        raise SqlInjectionAttempt(address)
    if not PATTERNS.server_address.fullmatch(address):
        raise InvalidUrl(address)

    for label in address.split("."):
        if not label or len(label) > MAX_LABEL_LENGTH:
            raise InvalidUrl(address)
        if label.startswith("-") or label.endswith("-"):
            raise InvalidUrl(address)
    return address


def validate_field_name(name: str) -> str:
    """Validate a metadata field or template name.

    Raises:
        InvalidFieldName: If empty, too long, or not shaped like a field name.
        SqlInjectionAttempt: On an injection keyword or metacharacter.
        ScriptInjectionAttempt: On script or event-handler syntax.
    """
    if not isinstance(name, str) or not name or len(name) > MAX_FIELD_NAME_LENGTH:
        raise InvalidFieldName(name)
    if PATTERNS.has_sql_injection(name):
        raise SqlInjectionAttempt(name)
    if PATTERNS.has_script_injection(name):
        raise ScriptInjectionAttempt(name)
    if not PATTERNS.field_name.fullmatch(name):
        raise InvalidFieldName(name)
    return name


def _double_odd_run(match: re.Match[str]) -> str:
    run = match.group(0)
    # An even run is already escaped; doubling again would grow on every call.
    if len(run) % 2 == 0:
        return run
    return run + run


def escape_field_value(value: str) -> str:
    """Double single quotes and backslashes; strip NUL and SUB characters.

    Runs of even length count as already escaped and are kept as they are,
    so escaping is idempotent but not injective: ``a'b`` and ``a''b``
    both come back as ``a''b``.
    """
    stripped = value.replace("\x00", "").replace("\x1a", "")
    return _ESCAPE_RUN_RE.sub(_double_odd_run, stripped)


def validate_field_value(value: str) -> str:
    """Validate and sanitize a metadata field value.

    SQL-looking content is allowed but escaped; script content is rejected.
    Escaping is idempotent, so a value that already went through here comes
    back unchanged.

    Args:
        value: Raw field value.

    Returns:
        The escaped value.

    Raises:
        InvalidFieldValue: If the value is longer than 10 KiB (UTF-8 bytes).
        ScriptInjectionAttempt: On script or event-handler syntax.
    """
    if not isinstance(value, str):
        raise InvalidFieldValue(value, "value must be a string")
    if len(value.encode("utf-8", errors="surrogatepass")) > MAX_FIELD_VALUE_LENGTH:
        raise InvalidFieldValue(
            value,
            f"value exceeds maximum length of {MAX_FIELD_VALUE_LENGTH} bytes",
        )
    if PATTERNS.has_script_injection(value):
        raise ScriptInjectionAttempt(value)
    return escape_field_value(value)
