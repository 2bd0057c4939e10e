"""
Command-line interface module for mvnsettings.

Typer application with Rich formatted output.
"""

from .main import app

__all__ = ["app"]
