"""Compiled matchers shared by every validator.

The registry is built once at import time (the import lock makes
concurrent first use race-free) and is read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# SQL statement keywords plus comment, terminator, quote and control chars.
# Substring matches are intended: "Created" trips CREATE.
_SQL_INJECTION = (
    r"(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|EXECUTE|UNION"
    r"|--|;|'|\x00|\n|\r|\x1a)"
)

_SCRIPT_INJECTION = r"(<script|javascript:|on\w+\s*=|eval\(|alert\(|document\.|window\.)"

_REPOSITORY_NAME = r"[A-Za-z0-9][A-Za-z0-9_\-]{0,63}"
_FIELD_NAME = r"[A-Za-z][A-Za-z0-9_\-\s]{0,127}"
_SERVER_ADDRESS = r"[A-Za-z0-9][A-Za-z0-9\-.]{0,251}[A-Za-z0-9]"


@dataclass(frozen=True)
class PatternRegistry:
    """Immutable set of matchers.

    Shape patterns are used with ``fullmatch`` so a trailing newline can
    never slip past an anchored ``$``.
    """

    sql_injection: re.Pattern[str]
    script_injection: re.Pattern[str]
    repository_name: re.Pattern[str]
    field_name: re.Pattern[str]
    server_address: re.Pattern[str]

    @classmethod
    def build(cls) -> PatternRegistry:
        return cls(
            sql_injection=re.compile(_SQL_INJECTION, re.IGNORECASE),
            script_injection=re.compile(_SCRIPT_INJECTION, re.IGNORECASE),
            repository_name=re.compile(_REPOSITORY_NAME),
            field_name=re.compile(_FIELD_NAME),
            server_address=re.compile(_SERVER_ADDRESS),
        )

    def has_sql_injection(self, value: str) -> bool:
        return self.sql_injection.search(value) is not None

    def has_script_injection(self, value: str) -> bool:
        return self.script_injection.search(value) is not None


PATTERNS = PatternRegistry.build()
