"""EPUB writing: serializes materialized books back into containers."""

from .writer import EpubWriter, write_book


__all__ = ["EpubWriter", "write_book"]
