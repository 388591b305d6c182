"""
epubkit - Read EPUB 2 and EPUB 3 books into an immutable object model.

``open_book`` parses the package structure and defers content reads;
``read_book`` reads everything into memory; ``write_book`` serializes a
read book back into an EPUB container.
"""

from .book_ref import EpubBookRef
from .epub import EpubWriter, write_book
from .models import EpubBook, EpubChapter, EpubChapterRef, EpubSchema, ReaderSettings
from .reader import Materializer, open_book, read_book
from .utils.exceptions import (
    ArchiveClosedError,
    ContentReadError,
    DanglingNavigationReferenceError,
    DanglingSpineReferenceError,
    EntryNotFoundError,
    EpubError,
    EpubWriteError,
    MalformedContainerError,
    MalformedNavigationError,
    MalformedPackageError,
    MissingCoverImageError,
    MissingManifestError,
    MissingSpineError,
)


__version__ = "0.1.0"

__all__ = [
    "ArchiveClosedError",
    "ContentReadError",
    "DanglingNavigationReferenceError",
    "DanglingSpineReferenceError",
    "EntryNotFoundError",
    "EpubBook",
    "EpubBookRef",
    "EpubChapter",
    "EpubChapterRef",
    "EpubError",
    "EpubSchema",
    "EpubWriteError",
    "EpubWriter",
    "Materializer",
    "MalformedContainerError",
    "MalformedNavigationError",
    "MalformedPackageError",
    "MissingCoverImageError",
    "MissingManifestError",
    "MissingSpineError",
    "ReaderSettings",
    "__version__",
    "open_book",
    "read_book",
    "write_book",
]
