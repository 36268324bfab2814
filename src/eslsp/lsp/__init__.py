"""LSP front end publishing linter diagnostics."""

from eslsp.lsp.adapter import offset_to_position, to_lsp_diagnostic
from eslsp.lsp.server import create_server

__all__ = [
    "create_server",
    "offset_to_position",
    "to_lsp_diagnostic",
]
