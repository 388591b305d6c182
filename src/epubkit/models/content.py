"""Pydantic models for content files, lazy references and resolved values."""

import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar, Union

from pydantic import Field, PrivateAttr

from ..utils.exceptions import ArchiveClosedError
from .base import EpubModel


if TYPE_CHECKING:
    from ..archive import EpubArchive


class EpubContentType(str, Enum):
    XHTML_1_1 = "XHTML_1_1"
    DTBOOK = "DTBOOK"
    DTBOOK_NCX = "DTBOOK_NCX"
    OEB1_DOCUMENT = "OEB1_DOCUMENT"
    XML = "XML"
    CSS = "CSS"
    OEB1_CSS = "OEB1_CSS"
    IMAGE_GIF = "IMAGE_GIF"
    IMAGE_JPEG = "IMAGE_JPEG"
    IMAGE_PNG = "IMAGE_PNG"
    IMAGE_SVG = "IMAGE_SVG"
    IMAGE_BMP = "IMAGE_BMP"
    IMAGE_WEBP = "IMAGE_WEBP"
    FONT_TRUETYPE = "FONT_TRUETYPE"
    FONT_OPENTYPE = "FONT_OPENTYPE"
    FONT_WOFF = "FONT_WOFF"
    FONT_WOFF2 = "FONT_WOFF2"
    OTHER = "OTHER"


class EpubContentFile(EpubModel):
    """Identity shared by every content file: path, content type and MIME type."""

    file_name: str
    content_type: EpubContentType
    content_mime_type: str


class EpubContentFileRef(EpubContentFile):
    """A content file that has not been read yet.

    The reference only holds a weak link to the archive; it never keeps the
    archive alive and fails with ArchiveClosedError once the archive is gone.
    """

    _archive: Any = PrivateAttr(default=None)

    @classmethod
    def bind(cls, archive: "EpubArchive", **fields: Any) -> Self:
        ref = cls(**fields)
        ref._archive = weakref.ref(archive)
        return ref

    def _get_archive(self) -> "EpubArchive":
        archive = self._archive() if self._archive is not None else None
        if archive is None:
            raise ArchiveClosedError(f"Archive for {self.file_name} is no longer available")
        return archive

    def read_content_as_bytes(self) -> bytes:
        return self._get_archive().read_bytes(self.file_name)

    def read_content_as_text(self, encoding: str | None = None) -> str:
        return self._get_archive().read_text(
            self.file_name,
            encoding=encoding,
            is_html=self.content_type == EpubContentType.XHTML_1_1,
        )


class TextContentFileRef(EpubContentFileRef):
    def read_content(self) -> str:
        return self.read_content_as_text()


class ByteContentFileRef(EpubContentFileRef):
    def read_content(self) -> bytes:
        return self.read_content_as_bytes()


class TextContentFile(EpubContentFile):
    content: str


class ByteContentFile(EpubContentFile):
    content: bytes


TextT = TypeVar("TextT", bound=EpubContentFile)
ByteT = TypeVar("ByteT", bound=EpubContentFile)


class EpubContent(EpubModel, Generic[TextT, ByteT]):
    """Content files bucketed by kind and keyed by archive path.

    The same model serves the lazy view (references) and the materialized
    view (decoded values); ``all_files`` also holds files outside every bucket.
    """

    html: dict[str, TextT] = Field(default_factory=dict)
    css: dict[str, TextT] = Field(default_factory=dict)
    images: dict[str, ByteT] = Field(default_factory=dict)
    fonts: dict[str, ByteT] = Field(default_factory=dict)
    all_files: dict[str, Union[TextT, ByteT]] = Field(default_factory=dict)


EpubContentRef = EpubContent[TextContentFileRef, ByteContentFileRef]
EpubResolvedContent = EpubContent[TextContentFile, ByteContentFile]
