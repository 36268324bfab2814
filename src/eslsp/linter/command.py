"""Command line construction for a linter run."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from eslsp.linter.config import LinterConfig
from eslsp.linter.types import DocumentSnapshot

__all__ = [
    "BASE_FLAGS",
    "build_command",
    "resolve_cwd",
    "stdin_filename",
]

# No colour codes, no .eslintignore filtering, read the document from stdin.
BASE_FLAGS = ("--no-color", "--no-ignore", "--stdin")


def _uri_basename(uri: str) -> str:
    parsed = urlparse(uri)
    name = Path(unquote(parsed.path)).name
    return name or "untitled"


def resolve_cwd(snapshot: DocumentSnapshot, config: LinterConfig) -> Path:
    """
    Working directory for the linter process.

    The configured project root wins, then the document's directory, then
    the current directory.
    """
    if config.project_root is not None:
        return config.project_root
    if snapshot.path:
        return Path(snapshot.path).parent
    return Path.cwd()


def stdin_filename(snapshot: DocumentSnapshot, cwd: Path) -> str:
    """Path the linter should treat the stdin text as coming from."""
    if snapshot.path:
        return snapshot.path
    return str(cwd / _uri_basename(snapshot.uri))


def build_command(
    executable: str, snapshot: DocumentSnapshot, config: LinterConfig
) -> list[str]:
    """
    Build the argument vector for checking ``snapshot``.

    Args:
        executable: Resolved path of the linter executable.
        snapshot: Document being checked.
        config: Linter configuration (extra args are appended verbatim).

    Returns:
        Argument vector suitable for ``asyncio.create_subprocess_exec``.
    """
    cwd = resolve_cwd(snapshot, config)
    return [
        executable,
        *BASE_FLAGS,
        "--stdin-filename",
        stdin_filename(snapshot, cwd),
        *config.extra_args,
    ]
