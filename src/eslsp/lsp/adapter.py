"""Adapter module for converting linter results into LSP protocol types."""

from __future__ import annotations

from lsprotocol import types
from pygls.workspace import TextDocument

from eslsp.linter.types import DocumentSnapshot, LintDiagnostic, Severity
from eslsp.text import split_lsp_lines, utf16_length

__all__ = [
    "offset_to_position",
    "severity_to_lsp",
    "snapshot_from_document",
    "to_lsp_diagnostic",
]

SOURCE_NAME = "eslint"

_SEVERITY_TO_LSP: dict[Severity, types.DiagnosticSeverity] = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
}


def snapshot_from_document(document: TextDocument) -> DocumentSnapshot:
    """Take an immutable snapshot of a workspace document."""
    return DocumentSnapshot(
        uri=document.uri,
        path=document.path if document.uri.startswith("file:") else None,
        source=document.source,
        version=document.version,
    )


def offset_to_position(
    document: TextDocument | DocumentSnapshot, offset: int
) -> types.Position:
    """
    Convert a document offset to an LSP Position.

    Args:
        document: The text document or snapshot
        offset: 0-based offset in the document (clamped to its length)

    Returns:
        LSP position with 0-based line and UTF-16 character
    """
    remaining = max(offset, 0)
    lines = split_lsp_lines(document.source)

    for line_number, line in enumerate(lines):
        if remaining <= len(line.rstrip("\r\n")):
            return types.Position(
                line=line_number, character=utf16_length(line[:remaining])
            )
        if remaining < len(line):
            # Offset points inside a line terminator
            content = line.rstrip("\r\n")
            return types.Position(line=line_number, character=utf16_length(content))
        remaining -= len(line)

    if lines and lines[-1].endswith(("\n", "\r")):
        return types.Position(line=len(lines), character=0)
    if lines:
        last = lines[-1]
        return types.Position(line=len(lines) - 1, character=utf16_length(last))
    return types.Position(line=0, character=0)


def severity_to_lsp(severity: Severity) -> types.DiagnosticSeverity:
    """Map internal Severity to LSP DiagnosticSeverity."""
    return _SEVERITY_TO_LSP.get(severity, types.DiagnosticSeverity.Error)


def to_lsp_diagnostic(
    diagnostic: LintDiagnostic, document: TextDocument | DocumentSnapshot
) -> types.Diagnostic:
    """
    Convert a LintDiagnostic to an LSP Diagnostic.

    Args:
        diagnostic: Diagnostic with offsets into ``document``
        document: The document the offsets were resolved against

    Returns:
        LSP Diagnostic carrying the rule id as its code
    """
    return types.Diagnostic(
        range=types.Range(
            start=offset_to_position(document, diagnostic.start),
            end=offset_to_position(document, diagnostic.end),
        ),
        message=diagnostic.message,
        severity=severity_to_lsp(diagnostic.severity),
        source=SOURCE_NAME,
        code=diagnostic.rule,
    )
