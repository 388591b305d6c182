"""Pydantic models for chapter trees."""

from typing import Any, Self

from pydantic import PrivateAttr

from ..utils.exceptions import ArchiveClosedError
from .base import EpubModel
from .content import EpubContentFileRef


class EpubChapterBase(EpubModel):
    title: str | None = None
    content_file_name: str
    anchor: str | None = None


class EpubChapterRef(EpubChapterBase):
    """A chapter whose HTML has not been read yet.

    Equality covers title, content file name, anchor and the sub-chapters in
    order; the bound content file reference is not part of it.
    """

    sub_chapters: tuple["EpubChapterRef", ...] = ()

    _content_file: EpubContentFileRef | None = PrivateAttr(default=None)

    @classmethod
    def bind(cls, content_file: EpubContentFileRef, **fields: Any) -> Self:
        chapter = cls(**fields)
        chapter._content_file = content_file
        return chapter

    @property
    def content_file(self) -> EpubContentFileRef | None:
        return self._content_file

    def read_html_content(self) -> str:
        if self._content_file is None:
            raise ArchiveClosedError(f"Chapter {self.content_file_name} is not bound to an archive")
        return self._content_file.read_content_as_text()


class EpubChapter(EpubChapterBase):
    html_content: str | None = None
    sub_chapters: tuple["EpubChapter", ...] = ()


# Enable forward references for recursive chapter models
EpubChapterRef.model_rebuild()
EpubChapter.model_rebuild()
