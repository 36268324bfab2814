"""Entry point for the eslsp server."""

import sys

from eslsp.cli import run


def main() -> None:
    """Run the server with command-line arguments."""
    sys.exit(run())


if __name__ == "__main__":
    main()
