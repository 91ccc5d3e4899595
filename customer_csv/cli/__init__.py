"""Command line interface (``python -m customer_csv.cli``)."""

from .app import main

__all__ = ["main"]
