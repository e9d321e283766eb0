"""Massing Builder CLI.

Usage:
    python -m massing_builder <command> [options]
"""

from massing_builder.cli.main import app

if __name__ == "__main__":
    app()
