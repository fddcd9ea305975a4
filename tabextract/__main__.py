"""CLI entry point for tabextract."""

from .cli import main

main()
