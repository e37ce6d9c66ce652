"""File path and file name validation.

Paths are checked for traversal before the filesystem is touched, then
resolved read-only. Nothing here creates, opens, or writes files.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from lfguard.validation.errors import InvalidFileName, InvalidFilePath, PathTraversalAttempt

MAX_FILE_NAME_LENGTH = 255

WINDOWS_INVALID_CHARS = '<>:"|?*'

WINDOWS_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)


class TargetPlatform(str, Enum):
    """Filesystem whose naming rules a file name must satisfy.

    Chosen by the caller, never detected from the host, so Windows rules
    can be checked on any machine.
    """

    POSIX = "posix"
    WINDOWS = "windows"


def validate_file_path(path: str) -> Path:
    """Validate a local path and return its canonical absolute form.

    An existing path is fully resolved. A path that does not exist yet
    (an export target, for example) is accepted when its parent directory
    exists; the result is the resolved parent joined with the final name.

    Args:
        path: Caller-supplied path string.

    Returns:
        Canonical absolute Path.

    Raises:
        InvalidFilePath: If the path is empty, contains a NUL byte, cannot
            be resolved, or its parent directory does not exist,
            or it is a symlink whose target does not exist.
        PathTraversalAttempt: If the path contains ``..`` or ``~``, or the
            resolved path still has a ``..`` component.
    """
    if not isinstance(path, str) or not path or "\x00" in path:
        raise InvalidFilePath(path)
    if ".." in path or "~" in path:
        raise PathTraversalAttempt(path)

    candidate = Path(path)
    try:
        canonical = candidate.resolve(strict=True)
    except FileNotFoundError:
        return _resolve_new_file(path, candidate)
    except (OSError, RuntimeError) as e:
        raise InvalidFilePath(path) from e

    if ".." in canonical.parts:
        raise PathTraversalAttempt(path)
    return canonical


def _resolve_new_file(raw: str, candidate: Path) -> Path:
    """Resolve a not-yet-existing path through its parent directory."""
    try:
        dangling = candidate.is_symlink()
        parent = candidate.parent.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise InvalidFilePath(raw) from e
    # A dangling symlink would redirect the eventual write to its target
    if dangling:
        raise InvalidFilePath(raw)
    if not parent.is_dir() or not candidate.name:
        raise InvalidFilePath(raw)
    return parent / candidate.name


def validate_file_name(name: str, platform: TargetPlatform = TargetPlatform.POSIX) -> str:
    """Validate a bare file name for an import, rename, or copy.

    Args:
        name: The file name, without any directory part.
        platform: Filesystem rules to apply on top of the common ones.

    Returns:
        The same name.

    Raises:
        InvalidFileName: If the name is empty, longer than 255 bytes,
            contains NUL, a path separator or ``..``, or breaks the
            target platform's naming rules.
    """
    if not isinstance(name, str) or not name:
        raise InvalidFileName(name)
    if len(name.encode("utf-8", errors="surrogatepass")) > MAX_FILE_NAME_LENGTH:
        raise InvalidFileName(name)
    if "\x00" in name:
        raise InvalidFileName(name)
    if ".." in name or "/" in name or "\\" in name:
        raise InvalidFileName(name)

    if TargetPlatform(platform) is TargetPlatform.WINDOWS:
        _check_windows_name(name)
    return name


def _check_windows_name(name: str) -> None:
    if any(ch in WINDOWS_INVALID_CHARS or ord(ch) < 0x20 for ch in name):
        raise InvalidFileName(name)

    # CON and CON.txt are both device names
    stem = name.upper().split(".", 1)[0]
    if stem in WINDOWS_RESERVED_NAMES:
        raise InvalidFileName(name)
