"""Unit tests for EpubWriter and write_book."""

import io
import zipfile

import pytest

from epubkit import EpubWriter, open_book, read_book, write_book
from epubkit.archive import EpubArchive
from epubkit.readers import read_package_path


@pytest.fixture
def written(epub2_bytes):
    """The EPUB 2 fixture after one read and write cycle."""
    return EpubWriter(read_book(epub2_bytes)).write()


class TestContainerLayout:
    """Tests for the zip structure of written books."""

    def test_mimetype_is_first_and_stored(self, written):
        with zipfile.ZipFile(io.BytesIO(written)) as archive:
            first = archive.infolist()[0]
            assert first.filename == "mimetype"
            assert first.compress_type == zipfile.ZIP_STORED
            assert archive.read(first) == b"application/epub+zip"

    def test_container_points_at_package(self, written):
        with EpubArchive(written) as archive:
            assert read_package_path(archive) == "OEBPS/content.opf"

    def test_every_manifest_file_is_written(self, written, epub2_files):
        with zipfile.ZipFile(io.BytesIO(written)) as archive:
            names = set(archive.namelist())
        assert set(epub2_files) <= names

    def test_binary_files_are_copied_verbatim(self, written, epub2_files):
        with zipfile.ZipFile(io.BytesIO(written)) as archive:
            assert archive.read("OEBPS/Images/cover.jpg") == epub2_files["OEBPS/Images/cover.jpg"]
            assert archive.read("OEBPS/Fonts/serif.ttf") == epub2_files["OEBPS/Fonts/serif.ttf"]


class TestRoundTrip:
    """Reading a written book gives back the same structure."""

    @pytest.mark.parametrize("fixture", ["epub2_bytes", "epub3_bytes", "flat_bytes", "sibling_bytes"])
    def test_schema_and_chapters(self, request, fixture):
        original = read_book(request.getfixturevalue(fixture))
        reread = read_book(EpubWriter(original).write())

        assert reread.epub_schema.package.manifest == original.epub_schema.package.manifest
        assert reread.epub_schema.package.spine == original.epub_schema.package.spine
        assert reread.epub_schema == original.epub_schema
        assert reread.chapters == original.chapters
        assert reread.cover_image == original.cover_image

    def test_metadata_with_markup_characters(self, make_epub, epub2_files):
        epub2_files["OEBPS/content.opf"] = epub2_files["OEBPS/content.opf"].replace(
            "<dc:title>Test-Driven Development with Python</dc:title>",
            "<dc:title>Tom &amp; Jerry &lt;3 &quot;quoted&quot;</dc:title>",
        )
        original = read_book(make_epub(epub2_files))
        reread = read_book(EpubWriter(original).write())

        assert reread.title == 'Tom & Jerry <3 "quoted"'
        assert reread.epub_schema.package.metadata == original.epub_schema.package.metadata

    def test_text_keeps_declared_encoding(self, make_epub, epub2_files):
        epub2_files["OEBPS/Text/chapter2.xhtml"] = (
            '<?xml version="1.0" encoding="windows-1252"?>\n'
            '<html xmlns="http://www.w3.org/1999/xhtml"><body><p>Café</p></body></html>'
        ).encode("windows-1252")
        data = EpubWriter(read_book(make_epub(epub2_files))).write()

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.read("OEBPS/Text/chapter2.xhtml") == epub2_files["OEBPS/Text/chapter2.xhtml"]
        assert "Café" in read_book(data).chapters[1].html_content

    def test_epub2_attributes_are_written(self, written):
        with zipfile.ZipFile(io.BytesIO(written)) as archive:
            opf = archive.read("OEBPS/content.opf").decode()
        assert 'opf:role="aut"' in opf
        assert 'opf:scheme="ISBN"' in opf

    def test_epub3_refinements_stay_meta_elements(self, epub3_bytes):
        data = EpubWriter(read_book(epub3_bytes)).write()
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            opf = archive.read("EPUB/package.opf").decode()
        assert "opf:role" not in opf
        assert 'refines="#creator"' in opf


class TestWriteBook:
    """Tests for write_book."""

    def test_writes_file(self, tmp_path, epub3_bytes):
        book = read_book(epub3_bytes)
        destination = write_book(book, tmp_path / "out.epub")

        assert destination == tmp_path / "out.epub"
        with open_book(destination) as reopened:
            assert reopened.title == "Moby-Dick"
            assert reopened.read_cover() == book.cover_image
