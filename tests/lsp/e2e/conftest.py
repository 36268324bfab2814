"""Fixtures for E2E tests."""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

_SRC_DIR = Path(__file__).resolve().parents[3] / "src"


@pytest.fixture
async def lsp_server_process(
    fake_linter: Path,
) -> AsyncGenerator[asyncio.subprocess.Process, None]:
    """Start eslsp as a subprocess, linting with the fake linter."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(_SRC_DIR), env.get("PYTHONPATH")])
    )
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "eslsp",
        "--executable",
        str(fake_linter),
        "--debounce-ms",
        "0",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
        env=env,
    )

    yield process

    if process.returncode is None:
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=5.0)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()


@pytest.fixture
async def lsp_client(
    lsp_server_process: asyncio.subprocess.Process,
) -> AsyncGenerator[LspTestClient, None]:
    """Create an LSP client connected to the server's stdio."""
    assert lsp_server_process.stdin is not None
    assert lsp_server_process.stdout is not None

    client = LspTestClient(
        reader=lsp_server_process.stdout,
        writer=lsp_server_process.stdin,
    )
    yield client
