"""Type definitions for linter runs and their diagnostics."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from eslsp.text import split_lines


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class Severity(_StrEnum):
    """Severity of a reported issue."""

    ERROR = "error"
    WARNING = "warning"


class RunState(_StrEnum):
    """Lifecycle state of a single linter run."""

    RUNNING = "running"
    COMPLETED = "completed"
    SUPERSEDED = "superseded"
    FAILED = "failed"


class DocumentSnapshot(NamedTuple):
    """Immutable copy of a document taken when a run starts."""

    uri: str  # Stable document identity
    path: str | None  # On-disk path, None for unsaved buffers
    source: str
    version: int | None = None

    @property
    def lines(self) -> list[str]:
        """Document lines as ESLint numbers them, including their line endings."""
        return split_lines(self.source)


class LintDiagnostic(NamedTuple):
    """A single issue reported by the linter, anchored to the snapshot text."""

    start: int  # Start offset in the document
    end: int  # End offset in the document (exclusive)
    severity: Severity
    message: str  # Composed message, e.g. "error: Missing semicolon [semi]"
    rule: str | None = None  # Rule identifier (e.g., "no-unused-vars")
