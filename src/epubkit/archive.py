"""Zip archive access with EPUB path normalization."""

import io
import posixpath
import zipfile
import zlib
from typing import BinaryIO
from urllib.parse import unquote

from bs4.dammit import EncodingDetector, UnicodeDammit

from .display import get_logger
from .utils.exceptions import (
    ArchiveClosedError,
    ContentReadError,
    EntryNotFoundError,
    MalformedContainerError,
)


logger = get_logger(__name__)


def normalize_path(path: str, base: str | None = None) -> str:
    """Normalize an archive path.

    Resolves ``.``/``..`` segments and backslashes and makes the result
    relative to the archive root. A relative ``path`` is joined to the
    ``base`` directory first; a path starting with ``/`` ignores ``base``.
    Segments climbing above the root are dropped. Returns "" for the root.
    """
    raw = (path or "").replace("\\", "/")
    if base and not raw.startswith("/"):
        raw = posixpath.join(base.replace("\\", "/"), raw)
    normalized = posixpath.normpath(raw).lstrip("/")
    while normalized.startswith("../"):
        normalized = normalized[3:]
    return "" if normalized in {"", ".", ".."} else normalized


def split_href(href: str) -> tuple[str, str | None]:
    """Split an href into its (unquoted) path part and fragment."""
    file_part, sep, fragment = (href or "").strip().partition("#")
    anchor = unquote(fragment) if sep and fragment else None
    return unquote(file_part), anchor


def resolve_href(href: str, base: str | None) -> tuple[str, str | None]:
    """Resolve an href found in a document located in ``base`` to (archive path, anchor)."""
    file_part, anchor = split_href(href)
    if not file_part:
        return "", anchor
    return normalize_path(file_part, base), anchor


def decode_text(data: bytes, default_encoding: str = "utf-8", is_html: bool = False) -> str:
    """Decode text using its BOM or declared encoding, falling back to ``default_encoding``."""
    declared = EncodingDetector.find_declared_encoding(data, is_html=is_html)
    candidates = [encoding for encoding in (declared, default_encoding) if encoding]
    dammit = UnicodeDammit(data, user_encodings=candidates, is_html=is_html)
    if dammit.unicode_markup is None:
        raise UnicodeDecodeError(default_encoding, data, 0, len(data), "no usable encoding found")
    return dammit.unicode_markup


class EpubArchive:
    """Read-only view over the zip entries of an EPUB.

    Entries are indexed by normalized path, so lookups do not depend on
    leading slashes, backslashes or ``..`` segments. Reads of different
    entries may run concurrently.

    Example:
        with EpubArchive(data) as archive:
            opf = archive.read_text("OEBPS/content.opf")
    """

    def __init__(self, source: bytes | bytearray | BinaryIO, default_encoding: str = "utf-8"):
        """
        Open the archive.

        Args:
            source: Container bytes or a seekable binary file object
            default_encoding: Encoding tried for text entries that declare none

        Raises:
            MalformedContainerError: If the data is not a zip archive
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            stream: BinaryIO = io.BytesIO(source)
        else:
            stream = source

        try:
            self._zip = zipfile.ZipFile(stream)
        except zipfile.BadZipFile as e:
            raise MalformedContainerError(f"Not a zip archive: {e}") from e

        self.default_encoding = default_encoding
        self._closed = False
        self._entries: dict[str, zipfile.ZipInfo] = {}
        for info in self._zip.infolist():
            if info.is_dir():
                continue
            key = normalize_path(info.filename)
            if key and key not in self._entries:
                self._entries[key] = info

        logger.debug("Opened archive with %d entries", len(self._entries))

    def __enter__(self) -> "EpubArchive":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the underlying zip file. Safe to call more than once."""
        if not self._closed:
            self._closed = True
            self._zip.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ArchiveClosedError("Archive has been closed")

    def names(self) -> list[str]:
        """Normalized paths of every file entry, in archive order."""
        self._ensure_open()
        return list(self._entries)

    def contains(self, path: str) -> bool:
        self._ensure_open()
        return normalize_path(path) in self._entries

    def find_entry(self, path: str) -> zipfile.ZipInfo:
        """
        Resolve a path to its zip entry.

        Raises:
            EntryNotFoundError: If no entry matches after normalization
            ArchiveClosedError: If the archive was closed
        """
        self._ensure_open()
        entry = self._entries.get(normalize_path(path))
        if entry is None:
            raise EntryNotFoundError(path)
        return entry

    def read_bytes(self, entry: zipfile.ZipInfo | str) -> bytes:
        """Decompress an entry (or the entry at a path) to bytes."""
        info = entry if isinstance(entry, zipfile.ZipInfo) else self.find_entry(entry)
        self._ensure_open()
        try:
            return self._zip.read(info)
        except ValueError as e:
            # zipfile raises ValueError once its file handle is closed
            if self._closed:
                raise ArchiveClosedError("Archive has been closed") from e
            raise ContentReadError(info.filename, str(e)) from e
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError) as e:
            raise ContentReadError(info.filename, str(e)) from e

    def read_text(
        self,
        entry: zipfile.ZipInfo | str,
        encoding: str | None = None,
        is_html: bool = False,
    ) -> str:
        """
        Decompress and decode an entry.

        Args:
            entry: Zip entry or archive path
            encoding: Explicit encoding; when omitted the BOM or the XML/HTML
                declaration is honoured, then the archive default
            is_html: Look for ``<meta charset>`` declarations as well

        Raises:
            ContentReadError: If decompression or decoding fails
        """
        data = self.read_bytes(entry)
        name = entry.filename if isinstance(entry, zipfile.ZipInfo) else entry
        try:
            if encoding:
                return data.decode(encoding)
            return decode_text(data, self.default_encoding, is_html=is_html)
        except (UnicodeDecodeError, LookupError) as e:
            raise ContentReadError(name, f"cannot decode text: {e}") from e
