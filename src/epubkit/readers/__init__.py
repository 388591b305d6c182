"""Readers turning archive entries into the EPUB object model."""

from .chapters import build_chapters
from .content import content_type_for, resolve_content
from .cover import find_cover_item
from .navigation import read_nav_document, read_navigation, read_ncx
from .package import read_package
from .schema import read_package_path, read_schema


__all__ = [
    "build_chapters",
    "content_type_for",
    "find_cover_item",
    "read_nav_document",
    "read_navigation",
    "read_ncx",
    "read_package",
    "read_package_path",
    "read_schema",
    "resolve_content",
]
