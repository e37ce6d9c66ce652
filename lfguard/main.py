"""CLI entry point for lfguard using Click."""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Callable

import click
import structlog

from lfguard import __version__
from lfguard.config import ConfigError, load_client_config
from lfguard.validation import (
    InputValidationError,
    TargetPlatform,
    validate_api_url,
    validate_entry_id,
    validate_field_name,
    validate_field_value,
    validate_file_name,
    validate_file_path,
    validate_file_size,
    validate_metadata_json,
    validate_repository_name,
    validate_server_address,
)

logger = structlog.get_logger()

LOG_LEVEL_ENV = "LFGUARD_LOG_LEVEL"


def _configure_logging(log_level: str) -> None:
    """Configure structlog for console output."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def _int_arg(validator: Callable[[int], int]) -> Callable[[str], int]:
    """Wrap an integer validator so it accepts the raw command-line string."""

    def check(raw: str) -> int:
        try:
            value = int(raw)
        except ValueError:
            value = raw  # type: ignore[assignment]
        return validator(value)

    return check


_CHECKS: dict[str, Callable[[str], Any]] = {
    "entry-id": _int_arg(validate_entry_id),
    "file-size": _int_arg(validate_file_size),
    "file-path": validate_file_path,
    "repository": validate_repository_name,
    "server": validate_server_address,
    "url": validate_api_url,
    "field-name": validate_field_name,
    "field-value": validate_field_value,
}


@click.group()
@click.version_option(version=__version__, prog_name="lfguard")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help=f"Logging level. Defaults to {LOG_LEVEL_ENV} env or WARNING.",
)
def cli(log_level: str | None) -> None:
    """lfguard - input validation for repository API requests."""
    _configure_logging(log_level or os.environ.get(LOG_LEVEL_ENV, "WARNING"))


@cli.command()
@click.argument("kind", type=click.Choice(sorted([*_CHECKS, "file-name"])))
@click.argument("value")
@click.option(
    "--platform",
    type=click.Choice([p.value for p in TargetPlatform]),
    default=TargetPlatform.POSIX.value,
    show_default=True,
    help="Target filesystem for file-name checks.",
)
def check(kind: str, value: str, platform: str) -> None:
    """Validate a single VALUE of the given KIND and print the accepted form."""
    try:
        if kind == "file-name":
            result = validate_file_name(value, TargetPlatform(platform))
        else:
            result = _CHECKS[kind](value)
    except InputValidationError as e:
        click.echo(f"FAIL [{e.kind.value}]: {e}", err=True)
        sys.exit(1)

    click.echo(str(result))


@cli.command()
@click.argument("metadata_file", type=click.Path(exists=True, dir_okay=False))
def check_metadata(metadata_file: str) -> None:
    """Validate a JSON metadata file and print the sanitized payload."""
    try:
        with open(metadata_file, encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        click.echo(f"FAIL: not valid JSON: {e}", err=True)
        sys.exit(1)

    try:
        validated = validate_metadata_json(payload)
    except InputValidationError as e:
        click.echo(f"FAIL [{e.kind.value}]: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(validated, indent=2))


@cli.command()
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Optional YAML file; LF_* environment variables override it.",
)
def check_config(config_file: str | None) -> None:
    """Validate client configuration without connecting to the server."""
    try:
        config = load_client_config(config_file)
    except (ConfigError, InputValidationError) as e:
        click.echo(f"FAIL: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"FAIL: {e}", err=True)
        logger.exception("config_check_failed")
        sys.exit(1)

    click.echo("Configuration OK")
    click.echo(f"  API address: {config.api_address}")
    click.echo(f"  Repository: {config.repository}")
    click.echo(f"  Username: {config.username}")
    click.echo(f"  Target platform: {config.target_platform.value}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
