"""Command-Line Entry Point - Root Module.

This is the root-level entry point for the command-line client.
It imports from the src package.
"""

import sys

from src.main import main

__all__ = [
    "main",
]


if __name__ == "__main__":
    sys.exit(main())
