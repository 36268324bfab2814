"""ESLint LSP server using pygls 2.0.

Runs the linter whenever a document is opened, changed or saved, and
publishes its report as diagnostics.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from eslsp import __version__
from eslsp.linter.runner import RunController
from eslsp.linter.types import DocumentSnapshot, LintDiagnostic
from eslsp.logging import get_logger
from eslsp.lsp.adapter import snapshot_from_document, to_lsp_diagnostic
from eslsp.lsp.error_handling import wrap_async_handler


def create_server(
    *,
    controller: RunController | None = None,
    logger: logging.Logger | None = None,
    debounce_ms: int = 300,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        controller: Run controller used to check documents. If None, one is
            created with the default linter configuration.
        logger: Optional logger instance. If None, uses default eslsp.lsp logger.
        debounce_ms: Delay before checking a changed document. Default 300.

    Returns:
        Configured LanguageServer instance publishing linter diagnostics.
    """
    if logger is None:
        logger = get_logger("lsp")
    if controller is None:
        controller = RunController()

    server = LanguageServer("eslsp", f"v{__version__}")

    def publish(snapshot: DocumentSnapshot, diagnostics: list[LintDiagnostic]) -> None:
        lsp_diagnostics = [
            to_lsp_diagnostic(diagnostic, snapshot) for diagnostic in diagnostics
        ]
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=snapshot.uri,
                diagnostics=lsp_diagnostics,
                version=snapshot.version,
            )
        )
        logger.debug(
            "Published %d diagnostics for %s (version %s)",
            len(lsp_diagnostics),
            snapshot.uri,
            snapshot.version,
        )

    def check(uri: str, *, delay_ms: int) -> None:
        document = server.workspace.get_text_document(uri)
        if document is None:
            return

        snapshot = snapshot_from_document(document)
        logger.debug("Checking %s (version %s)", uri, snapshot.version)
        controller.check_document(
            snapshot,
            lambda diagnostics: publish(snapshot, diagnostics),
            delay_ms=delay_ms,
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Handle textDocument/didOpen by checking the document right away."""
        check(params.text_document.uri, delay_ms=0)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didChange",
        default_factory=lambda: None,
    )
    async def did_change(params: types.DidChangeTextDocumentParams) -> None:
        """Handle textDocument/didChange with a debounced check."""
        check(params.text_document.uri, delay_ms=debounce_ms)

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didSave",
        default_factory=lambda: None,
    )
    async def did_save(params: types.DidSaveTextDocumentParams) -> None:
        """Handle textDocument/didSave by checking the document right away."""
        check(params.text_document.uri, delay_ms=0)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Handle textDocument/didClose by killing its run and clearing diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        controller.cancel(uri)
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[],
                version=None,
            )
        )

    return server
