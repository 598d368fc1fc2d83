"""Shared utility functions for enfusion-mcp.

Provides Rich-based console reporting, JSON loading and filename/path safety
checks.  All console output goes to stderr: stdout carries the stdio protocol
stream and must never receive stray text.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(stderr=True)

DEBUG_ENV_VAR = "ENFUSION_MCP_DEBUG"

_PREFIX = "[dim]\\[enfusion-mcp][/dim]"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnsafePathError(ValueError):
    """Raised when a user-supplied name or path could escape its base directory."""


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str) -> None:
    console.print(f"{_PREFIX} {escape(message)}", highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"{_PREFIX} [bold green]{escape(message)}[/bold green]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"{_PREFIX} [bold yellow]WARN:[/bold yellow] {escape(message)}", highlight=False)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"{_PREFIX} [bold red]ERROR:[/bold red] {escape(message)}", highlight=False)


def print_debug(message: str) -> None:
    """Print a debug message when ``ENFUSION_MCP_DEBUG`` is set."""
    if os.environ.get(DEBUG_ENV_VAR):
        console.print(f"{_PREFIX} [cyan]DEBUG:[/cyan] {escape(message)}", highlight=False)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document (any JSON type).

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def load_json_or_default(path: str | Path, default: Any) -> Any:
    """Load a JSON file, falling back to *default* on any failure.

    A missing file is reported as a warning; an unreadable or malformed file
    as an error.  Neither propagates.
    """
    file_path = Path(path)
    if not file_path.exists():
        print_warning(f"File not found: {file_path}")
        return default
    try:
        return load_json(file_path)
    except (OSError, ValueError) as exc:
        print_error(f"Failed to parse {file_path}: {exc}")
        return default


# ---------------------------------------------------------------------------
# Name / path safety
# ---------------------------------------------------------------------------

_RESERVED_CHARS = re.compile(r'[<>:"|?*]')
_RESERVED_NAMES = re.compile(r"^(CON|PRN|AUX|NUL|COM[0-9]|LPT[0-9])(\.|$)", re.IGNORECASE)
_ENFORCE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_filename(name: str) -> None:
    """Validate that *name* is safe to use as a single file or folder name.

    Rejects empty names, ``..``, path separators, characters Windows does not
    allow in file names, and Windows reserved device names.

    Raises:
        UnsafePathError: Describing the first rule that was violated.
    """
    if not name or not name.strip():
        raise UnsafePathError("Filename must not be empty")
    if ".." in name:
        raise UnsafePathError("Filename must not contain '..'")
    if "/" in name or "\\" in name:
        raise UnsafePathError("Filename must not contain path separators (/ or \\)")
    if _RESERVED_CHARS.search(name):
        raise UnsafePathError("Filename contains invalid characters")
    if _RESERVED_NAMES.match(name):
        raise UnsafePathError(f"Filename uses reserved name: {name}")


def validate_enforce_identifier(name: str) -> None:
    """Validate that *name* is a legal Enforce Script identifier.

    Raises:
        UnsafePathError: If *name* is not a letter/underscore followed by
            letters, digits or underscores.
    """
    if not _ENFORCE_IDENTIFIER.match(name):
        raise UnsafePathError(
            "Must be a valid Enforce identifier (letters, digits, underscores only, "
            "must start with a letter or underscore)"
        )


def safe_path(base: str | Path, *segments: str) -> Path:
    """Join *segments* onto *base*, refusing anything that escapes *base*.

    Every segment must pass :func:`validate_filename`.

    Returns:
        The resolved path.

    Raises:
        UnsafePathError: If a segment is unsafe or the result lies outside
            *base*.
    """
    for segment in segments:
        validate_filename(segment)

    base_path = Path(base).resolve()
    resolved = base_path.joinpath(*segments).resolve()
    if resolved != base_path and base_path not in resolved.parents:
        raise UnsafePathError("Path traversal not allowed: resolved path is outside project")
    return resolved


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()
