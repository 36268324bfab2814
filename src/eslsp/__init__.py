"""ESLint diagnostics for any LSP client."""

__version__ = "0.1.0"
