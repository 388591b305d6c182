"""Constants for Rich display system."""

# Emoji mappings for log levels and operations
EMOJI_MAP = {
    "debug": "🔍",
    "info": "ℹ️",  # noqa: RUF001
    "success": "✓",
    "warning": "⚠️",
    "error": "✗",
    "critical": "🚨",
    "book": "📚",
    "author": "👤",
    "publisher": "🏢",
    "date": "📅",
    "identifier": "🔖",
    "chapters": "📑",
    "files": "📦",
}

# Rich markup styles for different message types
STYLES = {
    "debug": "dim cyan",
    "info": "blue",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "critical": "bold white on red",
    "book_title": "bold cyan",
    "book_info": "white",
    "anchor": "dim",
}

# Log format
LOG_FORMAT = "%(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

# Root logger name for the package
LOGGER_NAME = "epubkit"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
