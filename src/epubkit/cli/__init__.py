"""
epubkit CLI module.

This module provides a Click-based command-line interface for inspecting EPUB files.
"""

from .commands import cli


__all__ = ["cli"]
