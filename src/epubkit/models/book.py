"""Pydantic model for a fully materialized book."""

from .base import EpubModel
from .chapter import EpubChapter
from .content import EpubResolvedContent
from .schema import EpubSchema


class ContentFailure(EpubModel):
    """A content file that could not be read while materializing a book."""

    path: str
    message: str


class EpubBook(EpubModel):
    """A book with every content file decoded and no archive attached.

    ``failures`` is only populated when materialization collects errors
    instead of aborting on the first one.
    """

    epub_schema: EpubSchema
    title: str
    author: str
    author_list: tuple[str, ...] = ()
    content: EpubResolvedContent
    cover_image: bytes | None = None
    chapters: tuple[EpubChapter, ...] = ()
    failures: tuple[ContentFailure, ...] = ()
