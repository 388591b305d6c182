"""Entry points for opening and materializing EPUB books."""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import BinaryIO

from .archive import EpubArchive
from .book_ref import EpubBookRef
from .display import get_logger
from .models import (
    ByteContentFile,
    ContentFailure,
    EpubBook,
    EpubChapter,
    EpubChapterRef,
    EpubContentFile,
    EpubContentFileRef,
    EpubContentRef,
    EpubResolvedContent,
    ReaderSettings,
    TextContentFile,
    TextContentFileRef,
)
from .readers import find_cover_item, read_schema, resolve_content
from .utils.exceptions import ContentReadError, EntryNotFoundError


logger = get_logger(__name__)

EpubSource = bytes | bytearray | memoryview | str | Path | BinaryIO


def _load_source(source: EpubSource) -> bytes | bytearray | BinaryIO:
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    if isinstance(source, memoryview):
        return source.tobytes()
    return source


def open_book(source: EpubSource, settings: ReaderSettings | None = None) -> EpubBookRef:
    """
    Open an EPUB without reading its content files.

    Args:
        source: Container bytes, a path to an .epub file or a binary file object
        settings: Reader configuration

    Returns:
        A book reference owning the archive; close it (or use it as a
        context manager) to release the archive

    Raises:
        MalformedContainerError: If the data is not an EPUB container
        MalformedPackageError: If the package document is invalid
    """
    settings = settings or ReaderSettings()
    archive = EpubArchive(_load_source(source), default_encoding=settings.default_encoding)
    try:
        epub_schema = read_schema(archive)
        content = resolve_content(epub_schema, archive)
    except Exception:
        archive.close()
        raise

    book_ref = EpubBookRef(archive, epub_schema, content, settings)
    logger.info("Opened %r by %s", book_ref.title, book_ref.author or "unknown author")
    return book_ref


def read_book(source: EpubSource, settings: ReaderSettings | None = None) -> EpubBook:
    """
    Open an EPUB and read every content file and chapter into memory.

    The archive is released before returning, whether or not reading succeeded.
    """
    settings = settings or ReaderSettings()
    with open_book(source, settings) as book_ref:
        return Materializer(settings).materialize(book_ref)


def read_content_file(ref: EpubContentFileRef) -> EpubContentFile:
    """
    Read one content file reference into its resolved value.

    Raises:
        ContentReadError: If the file is missing, corrupt or cannot be decoded
    """
    fields = {
        "file_name": ref.file_name,
        "content_type": ref.content_type,
        "content_mime_type": ref.content_mime_type,
    }
    try:
        if isinstance(ref, TextContentFileRef):
            return TextContentFile(content=ref.read_content_as_text(), **fields)
        return ByteContentFile(content=ref.read_content_as_bytes(), **fields)
    except EntryNotFoundError as e:
        raise ContentReadError(ref.file_name, "declared in the manifest but missing from the archive") from e


class Materializer:
    """Turns a book reference into a self-contained EpubBook.

    Content files are independent of each other, so they are read on a
    thread pool; results are stored by path in manifest order, never in
    completion order, so the book is the same for any worker count.
    """

    def __init__(self, settings: ReaderSettings | None = None):
        self.settings = settings or ReaderSettings()

    def materialize(self, book_ref: EpubBookRef) -> EpubBook:
        """
        Read every content file and chapter of ``book_ref``.

        Raises:
            ContentReadError: On the first unreadable file (in manifest order)
                when ``on_content_error`` is ``raise``
        """
        files, failures = self.read_files(book_ref.content)
        content = self._assemble_content(book_ref.content, files)
        chapters = tuple(self._read_chapters(book_ref.get_chapters(), files))

        cover_image = None
        cover_item = find_cover_item(book_ref.epub_schema)
        if cover_item is not None:
            cover_file = files.get(cover_item.path)
            if isinstance(cover_file, ByteContentFile):
                cover_image = cover_file.content
            elif isinstance(cover_file, TextContentFile):
                cover_image = cover_file.content.encode("utf-8")

        if failures:
            logger.warning("%d content file(s) could not be read", len(failures))

        return EpubBook(
            epub_schema=book_ref.epub_schema,
            title=book_ref.title,
            author=book_ref.author,
            author_list=book_ref.author_list,
            content=content,
            cover_image=cover_image,
            chapters=chapters,
            failures=failures,
        )

    def read_files(
        self, content_ref: EpubContentRef
    ) -> tuple[dict[str, EpubContentFile], list[ContentFailure]]:
        """Read every file of ``content_ref.all_files``, keyed by path in manifest order."""
        refs = list(content_ref.all_files.values())
        results: dict[str, EpubContentFile] = {}
        failures: list[ContentFailure] = []

        if self.settings.max_workers > 1 and len(refs) > 1:
            with ThreadPoolExecutor(
                max_workers=self.settings.max_workers, thread_name_prefix="epubkit-read"
            ) as executor:
                futures = [(ref.file_name, executor.submit(read_content_file, ref)) for ref in refs]
                try:
                    for path, future in futures:
                        self._store(path, future.result, results, failures)
                except BaseException:
                    for _, future in futures:
                        future.cancel()
                    raise
        else:
            for ref in refs:
                self._store(ref.file_name, partial(read_content_file, ref), results, failures)

        return results, failures

    def _store(
        self,
        path: str,
        read: Callable[[], EpubContentFile],
        results: dict[str, EpubContentFile],
        failures: list[ContentFailure],
    ) -> None:
        try:
            results[path] = read()
        except ContentReadError as e:
            if self.settings.on_content_error == "raise":
                raise
            logger.warning("Could not read %s: %s", path, e.reason)
            failures.append(ContentFailure(path=path, message=e.reason))

    @staticmethod
    def _assemble_content(
        content_ref: EpubContentRef, files: dict[str, EpubContentFile]
    ) -> EpubResolvedContent:
        def pick(bucket: dict) -> dict:
            return {path: files[path] for path in bucket if path in files}

        return EpubResolvedContent(
            html=pick(content_ref.html),
            css=pick(content_ref.css),
            images=pick(content_ref.images),
            fonts=pick(content_ref.fonts),
            all_files=pick(content_ref.all_files),
        )

    def _read_chapters(
        self, chapter_refs: tuple[EpubChapterRef, ...], files: dict[str, EpubContentFile]
    ) -> list[EpubChapter]:
        chapters = []
        for chapter_ref in chapter_refs:
            content_file = files.get(chapter_ref.content_file_name)
            chapters.append(
                EpubChapter(
                    title=chapter_ref.title,
                    content_file_name=chapter_ref.content_file_name,
                    anchor=chapter_ref.anchor,
                    html_content=content_file.content if isinstance(content_file, TextContentFile) else None,
                    sub_chapters=self._read_chapters(chapter_ref.sub_chapters, files),
                )
            )
        return chapters
