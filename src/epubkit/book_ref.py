"""Lazy book handle owning the opened archive."""

from typing import Any

from .archive import EpubArchive
from .display import get_logger
from .models import EpubChapterRef, EpubContentRef, EpubSchema, ReaderSettings
from .readers import build_chapters, find_cover_item
from .utils.exceptions import ArchiveClosedError, ContentReadError, EntryNotFoundError


logger = get_logger(__name__)


class EpubBookRef:
    """An opened EPUB whose content is read on demand.

    The reference is the sole owner of its archive: content and chapter
    references only point back to it weakly, and every read fails with
    ArchiveClosedError once the reference is closed or discarded.

    Example:
        with open_book(data) as book:
            print(book.title, book.author)
            for chapter in book.get_chapters():
                html = chapter.read_html_content()
    """

    def __init__(
        self,
        archive: EpubArchive,
        epub_schema: EpubSchema,
        content: EpubContentRef,
        settings: ReaderSettings | None = None,
    ):
        """
        Initialize the book reference.

        Args:
            archive: Opened archive; ownership passes to the reference
            epub_schema: Schema read from the archive
            content: Lazy content references built from the schema
            settings: Reader configuration
        """
        self._archive = archive
        self.epub_schema = epub_schema
        self.content = content
        self.settings = settings or ReaderSettings()

        metadata = epub_schema.package.metadata
        self.title = metadata.titles[0].value if metadata.titles else ""
        self.author_list = tuple(creator.value for creator in metadata.creators)
        self.author = ", ".join(self.author_list)

        self._chapters: tuple[EpubChapterRef, ...] | None = None

    def __enter__(self) -> "EpubBookRef":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<EpubBookRef {self.title!r} ({state})>"

    @property
    def closed(self) -> bool:
        return self._archive.closed

    @property
    def archive(self) -> EpubArchive:
        if self._archive.closed:
            raise ArchiveClosedError("Book reference has been closed")
        return self._archive

    def close(self) -> None:
        """Release the archive. Content references become unreadable."""
        if not self._archive.closed:
            logger.debug("Closing archive of %r", self.title)
        self._archive.close()

    def get_chapters(self) -> tuple[EpubChapterRef, ...]:
        """
        Return the top-level chapter references, building the tree on first use.

        Raises:
            ArchiveClosedError: If the reference has been closed
            DanglingNavigationReferenceError: If a navigation entry targets an
                unknown file and the ``raise`` policy is configured
        """
        if self._archive.closed:
            raise ArchiveClosedError("Book reference has been closed")
        if self._chapters is None:
            self._chapters = build_chapters(
                self.epub_schema,
                self.content,
                on_dangling=self.settings.on_dangling_navigation,
            )
        return self._chapters

    def read_cover(self) -> bytes | None:
        """
        Read the cover image bytes, or None when the book declares no cover.

        Raises:
            ArchiveClosedError: If the reference has been closed
            MissingCoverImageError: If the cover metadata names no manifest item
            ContentReadError: If the cover image is missing from the archive or unreadable
        """
        archive = self.archive
        item = find_cover_item(self.epub_schema)
        if item is None:
            return None
        try:
            return archive.read_bytes(item.path)
        except EntryNotFoundError as e:
            raise ContentReadError(item.path, "declared in the manifest but missing from the archive") from e
