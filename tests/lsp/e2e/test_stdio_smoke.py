"""E2E smoke tests for the server via stdio."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

PUBLISH = "textDocument/publishDiagnostics"


@pytest.mark.e2e
class TestStdioE2E:
    """End-to-end tests for LSP server communication."""

    @pytest.mark.asyncio
    async def test_initialize_shutdown(self, lsp_client: LspTestClient) -> None:
        response = await lsp_client.initialize()

        assert "result" in response
        assert "capabilities" in response["result"]

        await lsp_client.shutdown_exit()

    @pytest.mark.asyncio
    async def test_open_publishes_diagnostics(
        self, lsp_client: LspTestClient, tmp_path: Path
    ) -> None:
        await lsp_client.initialize()
        uri = (tmp_path / "app.js").as_uri()

        await lsp_client.did_open(uri=uri, text="let a = 1\n  var b = 2\n")
        notification = await lsp_client.wait_for_notification(PUBLISH)

        params = notification["params"]
        assert params["uri"] == uri
        assert params["version"] == 1
        (diagnostic,) = params["diagnostics"]
        assert diagnostic["code"] == "no-var"
        assert diagnostic["severity"] == 1
        assert diagnostic["range"] == {
            "start": {"line": 1, "character": 2},
            "end": {"line": 1, "character": 5},
        }
        assert diagnostic["message"] == (
            "error: Unexpected var, use let or const instead [no-var]"
        )

        await lsp_client.shutdown_exit()

    @pytest.mark.asyncio
    async def test_change_reports_latest_text(
        self, lsp_client: LspTestClient, tmp_path: Path
    ) -> None:
        await lsp_client.initialize()
        uri = (tmp_path / "app.js").as_uri()

        await lsp_client.did_open(uri=uri, text="// sleep\n")
        await lsp_client.did_change(uri=uri, text="debugger\n", version=2)
        notification = await lsp_client.wait_for_notification(PUBLISH)

        params = notification["params"]
        assert params["version"] == 2
        assert [d["code"] for d in params["diagnostics"]] == ["no-debugger"]
        assert params["diagnostics"][0]["severity"] == 2

        await lsp_client.shutdown_exit()

    @pytest.mark.asyncio
    async def test_close_clears_diagnostics(
        self, lsp_client: LspTestClient, tmp_path: Path
    ) -> None:
        await lsp_client.initialize()
        uri = (tmp_path / "app.js").as_uri()

        await lsp_client.did_open(uri=uri, text="// sleep\n")
        await lsp_client.did_close(uri=uri)
        notification = await lsp_client.wait_for_notification(PUBLISH)

        assert notification["params"]["uri"] == uri
        assert notification["params"]["diagnostics"] == []

        await lsp_client.shutdown_exit()
