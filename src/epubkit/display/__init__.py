"""
Rich-based display and logging for epubkit.

This module provides the package logger setup and the terminal output
used by the command line interface.
"""

from .constants import EMOJI_MAP, STYLES
from .rich_display import RichDisplay
from .rich_logger import get_logger, get_valid_log_levels, set_log_level, setup_rich_logger


__all__ = [
    "EMOJI_MAP",
    "STYLES",
    "RichDisplay",
    "get_logger",
    "get_valid_log_levels",
    "set_log_level",
    "setup_rich_logger",
]
