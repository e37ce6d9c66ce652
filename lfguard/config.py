"""Client configuration loading and validation using Pydantic models.

Connection settings come from an optional YAML file, with ``LF_*``
environment variables taking precedence. Identifiers that end up in API
URLs are run through the validation layer while the model is built, so
a ClientConfig can only ever hold validated values.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator

from lfguard.validation import TargetPlatform, validate_repository_name, validate_server_address

logger = structlog.get_logger()

# Config field -> environment variable, in the order missing values are reported
ENV_VARS: dict[str, str] = {
    "api_address": "LF_API_ADDRESS",
    "repository": "LF_REPOSITORY",
    "username": "LF_USERNAME",
    "password": "LF_PASSWORD",
}

TARGET_PLATFORM_ENV = "LF_TARGET_PLATFORM"

PLACEHOLDER_VALUES = frozenset(
    [
        "your-server.laserfiche.com",
        "your-repository",
        "username",
        "password",
        "placeholder",
        "default",
        "example",
        "test",
        "",
    ]
)

PLACEHOLDER_FRAGMENTS = ("your-", "example", "placeholder")


class ConfigError(Exception):
    """Raised when required settings are missing or still hold template values."""

    def __init__(self, setting: str, message: str) -> None:
        self.setting = setting
        super().__init__(message)


class MissingSetting(ConfigError):
    def __init__(self, setting: str) -> None:
        super().__init__(setting, f"Required environment variable {setting!r} is not set")


class PlaceholderValue(ConfigError):
    def __init__(self, setting: str, value: str, exact: bool) -> None:
        self.value = value
        if exact:
            message = f"{setting} contains a placeholder or default value: {value!r}"
        else:
            message = f"{setting} appears to contain a placeholder value: {value!r}"
        super().__init__(setting, message)


class ClientConfig(BaseModel):
    """Connection settings for the repository API."""

    api_address: str
    repository: str
    username: str
    password: str = Field(repr=False)
    target_platform: TargetPlatform = TargetPlatform.POSIX

    @field_validator("api_address")
    @classmethod
    def check_api_address(cls, v: str) -> str:
        """Only a bare hostname or FQDN is accepted, never a URL."""
        return validate_server_address(v)

    @field_validator("repository")
    @classmethod
    def check_repository(cls, v: str) -> str:
        return validate_repository_name(v)


def check_not_placeholder(setting: str, value: str) -> None:
    """Reject values copied unchanged from a sample configuration.

    Raises:
        PlaceholderValue: If the value is a known placeholder or contains
            a placeholder fragment such as ``your-``.
    """
    normalized = value.strip().lower()
    if normalized in PLACEHOLDER_VALUES:
        raise PlaceholderValue(setting, value, exact=True)
    if any(fragment in normalized for fragment in PLACEHOLDER_FRAGMENTS):
        raise PlaceholderValue(setting, value, exact=False)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file, returning an empty dict if missing."""
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_client_config(
    config_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Load client settings from a YAML file and the environment.

    Args:
        config_file: Optional YAML file with the same keys as ClientConfig.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        A validated ClientConfig.

    Raises:
        MissingSetting: If a required setting is absent from both sources.
        PlaceholderValue: If a setting still holds a sample value.
        InputValidationError: If the address or repository is rejected.
        pydantic.ValidationError: If a value has the wrong type.
    """
    env = os.environ if environ is None else environ
    data = _load_yaml(Path(config_file)) if config_file is not None else {}

    for field, var in ENV_VARS.items():
        if var in env:
            data[field] = env[var]
    if TARGET_PLATFORM_ENV in env:
        data["target_platform"] = env[TARGET_PLATFORM_ENV]

    for field, var in ENV_VARS.items():
        if data.get(field) is None:
            raise MissingSetting(var)
    for field, var in ENV_VARS.items():
        check_not_placeholder(var, str(data[field]))

    config = ClientConfig(**data)
    logger.debug(
        "config_loaded",
        api_address=config.api_address,
        repository=config.repository,
        target_platform=config.target_platform.value,
    )
    return config
