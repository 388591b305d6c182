"""
EPUB writer module - Serializes a materialized book back into an EPUB container.
"""

import io
import zipfile
from pathlib import Path

from bs4.dammit import EncodingDetector
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..display import get_logger
from ..models import EpubBook, EpubContentFile, EpubNavigationSource, EpubVersion, TextContentFile
from ..readers.schema import CONTAINER_PATH
from ..utils.exceptions import EpubWriteError


logger = get_logger(__name__)

MIMETYPE = "application/epub+zip"


class EpubWriter:
    """
    Writes an EpubBook as an EPUB container.

    This class handles:
    - Rendering the package metadata files (container.xml, OPF, NCX) from the schema
    - Copying every other content file unchanged
    - Creating the ZIP structure with ``mimetype`` first and uncompressed
    """

    def __init__(self, book: EpubBook):
        """
        Initialize the writer.

        Args:
            book: Fully read book to serialize
        """
        self.book = book

        templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(enabled_extensions=("xml", "xhtml", "j2")),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def write(self) -> bytes:
        """
        Build the complete EPUB container.

        Returns:
            The container bytes

        Raises:
            EpubWriteError: If a template fails to render or the archive cannot be written
        """
        schema = self.book.epub_schema
        generated = {
            CONTAINER_PATH: self._render_container_xml(),
            schema.package_path: self._render_content_opf(),
        }
        navigation = schema.navigation
        if navigation is not None and navigation.source is EpubNavigationSource.NCX:
            generated[navigation.path] = self._render_toc_ncx()

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w") as epub:
                # mimetype must come first, stored, without extra fields
                epub.writestr("mimetype", MIMETYPE, compress_type=zipfile.ZIP_STORED)

                for path, data in generated.items():
                    epub.writestr(path, data, compress_type=zipfile.ZIP_DEFLATED)

                for path, content_file in self.book.content.all_files.items():
                    if path in generated or path == "mimetype":
                        continue
                    epub.writestr(path, self._file_bytes(content_file), compress_type=zipfile.ZIP_DEFLATED)
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise EpubWriteError(f"Cannot write EPUB archive: {e}") from e

        logger.debug(
            "Wrote %d generated and %d copied files",
            len(generated),
            len(self.book.content.all_files.keys() - generated.keys()),
        )
        return buffer.getvalue()

    @staticmethod
    def _file_bytes(content_file: EpubContentFile) -> bytes:
        if not isinstance(content_file, TextContentFile):
            return content_file.content

        # Text goes back out in the encoding it declares, so the declaration stays true
        declared = EncodingDetector.find_declared_encoding(content_file.content, is_html=True)
        try:
            return content_file.content.encode(declared or "utf-8")
        except (LookupError, UnicodeEncodeError):
            logger.debug("Re-encoding %s as UTF-8 instead of %s", content_file.file_name, declared)
            return content_file.content.encode("utf-8")

    def _render(self, template_name: str, **context: object) -> bytes:
        try:
            content = self.env.get_template(template_name).render(**context)
        except TemplateError as e:
            raise EpubWriteError(f"Cannot render {template_name}: {e}") from e
        return content.encode("utf-8", "xmlcharrefreplace")

    def _render_container_xml(self) -> bytes:
        """Render META-INF/container.xml pointing at the package document."""
        return self._render("container.xml.j2", package_path=self.book.epub_schema.package_path)

    def _render_content_opf(self) -> bytes:
        """Render the OPF package document from the schema."""
        package = self.book.epub_schema.package
        return self._render(
            "content.opf.j2",
            package=package,
            metadata=package.metadata,
            manifest=package.manifest,
            spine=package.spine,
            guide=package.guide,
            epub2=package.version is EpubVersion.EPUB_2,
        )

    def _render_toc_ncx(self) -> bytes:
        """Render the NCX table of contents from the navigation model."""
        return self._render("toc.ncx.j2", navigation=self.book.epub_schema.navigation)


def write_book(book: EpubBook, path: str | Path) -> Path:
    """
    Write ``book`` as an .epub file.

    Args:
        book: Fully read book
        path: Destination file; an existing file is replaced

    Returns:
        The destination path
    """
    destination = Path(path)
    data = EpubWriter(book).write()
    try:
        destination.write_bytes(data)
    except OSError as e:
        raise EpubWriteError(f"Cannot write {destination}: {e}") from e
    logger.info("Wrote %s (%d bytes)", destination, len(data))
    return destination
