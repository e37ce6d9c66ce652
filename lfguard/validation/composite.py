"""Validators for values built from several parts: API URLs and metadata payloads."""

from __future__ import annotations

import ipaddress
import re
import urllib.parse
from typing import Any

import structlog

from lfguard.validation.errors import InsecureUrl, InvalidFieldName, InvalidUrl, SqlInjectionAttempt
from lfguard.validation.patterns import PATTERNS
from lfguard.validation.scalars import validate_field_name, validate_field_value

logger = structlog.get_logger()

# RFC 3986 scheme followed by ':'
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")

# Code points a host may never contain (WHATWG forbidden host code points)
_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #%/:<>?@[\\]^|")


def validate_api_url(url: str) -> str:
    """Validate an API base URL.

    The URL must be absolute, use https, and name a host.

    Raises:
        InvalidUrl: If empty, not an absolute URL, or its host is missing or
            contains characters no host may hold.
        InsecureUrl: If the scheme is anything other than ``https``.
        SqlInjectionAttempt: On an injection pattern match anywhere in the URL.
    """
    if not isinstance(url, str) or not url:
        raise InvalidUrl(url)
    if not _SCHEME_RE.match(url) or any(ch.isspace() for ch in url):
        raise InvalidUrl(url)

    try:
        parsed = urllib.parse.urlsplit(url)
        host = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidUrl(url) from e

    if parsed.scheme != "https":
        raise InsecureUrl(url)
    if not host or not _is_well_formed_host(host):
        raise InvalidUrl(url)
    if PATTERNS.has_sql_injection(url):
        raise SqlInjectionAttempt(url)
    return url


def _is_well_formed_host(host: str) -> bool:
    """Check a parsed hostname: an IP literal, or a name free of forbidden code points."""
    if ":" in host:
        # Only a bracketed IPv6 literal leaves a colon in the hostname
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True
    return not any(ch in _FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in host)


def validate_metadata_json(metadata: Any) -> Any:
    """Validate a JSON metadata payload before it is sent as a request body.

    Only objects are inspected; any other JSON value is returned as is.
    Keys must be valid field names. String values, and string elements of
    list values, are sanitized with validate_field_value. Numbers, booleans,
    nulls and nested objects are copied without inspection.

    Args:
        metadata: Decoded JSON value.

    Returns:
        A new dict with the same keys in the same order and sanitized
        values, or ``metadata`` itself when it is not a dict.

    Raises:
        InvalidFieldName: If a key is not a string or not a valid field name.
        SqlInjectionAttempt: If a key matches an injection pattern.
        ScriptInjectionAttempt: If a key or string value contains script syntax.
        InvalidFieldValue: If a string value is too long.
    """
    if not isinstance(metadata, dict):
        return metadata

    validated: dict[str, Any] = {}
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise InvalidFieldName(key)
        field = validate_field_name(key)

        if isinstance(value, str):
            validated[field] = validate_field_value(value)
        elif isinstance(value, list):
            validated[field] = [
                validate_field_value(item) if isinstance(item, str) else item
                for item in value
            ]
        else:
            if isinstance(value, dict):
                logger.debug("metadata_nested_object_unvalidated", field=field)
            validated[field] = value
    return validated
