"""Filesystem probing for the linter executable and project root."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from eslsp.logging import get_logger

__all__ = [
    "PROJECT_MARKERS",
    "find_executable",
    "find_project_root",
]

_logger = get_logger("linter.discovery")

PROJECT_MARKERS = (
    "eslint.config.js",
    "eslint.config.mjs",
    "eslint.config.cjs",
    "eslint.config.ts",
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.json",
    ".eslintrc.yaml",
    ".eslintrc.yml",
    "package.json",
)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_project_root(document_path: Path) -> Path | None:
    """
    Find the nearest ancestor of ``document_path`` that looks like a project.

    A directory qualifies when it holds an ESLint config file or a
    ``package.json``.
    """
    start = document_path if document_path.is_dir() else document_path.parent
    for directory in (start, *start.parents):
        if any((directory / marker).exists() for marker in PROJECT_MARKERS):
            return directory
    return None


def find_executable(executable: str, project_root: Path | None = None) -> str | None:
    """
    Locate the linter executable.

    Args:
        executable: Executable name or path.
        project_root: Project root whose ``node_modules/.bin`` is searched
            before ``PATH``.

    Returns:
        Path to the executable, or None if it cannot be found.
    """
    candidate = Path(executable)
    if candidate.parent != Path("."):
        if _is_executable(candidate):
            return str(candidate)
        _logger.debug("Configured linter path is not executable: %s", executable)
        return None

    if project_root is not None:
        local = project_root / "node_modules" / ".bin" / executable
        if _is_executable(local):
            return str(local)

    return shutil.which(executable)
