"""Unit tests for building the chapter reference tree."""

import logging

import pytest

from epubkit.archive import EpubArchive
from epubkit.readers import build_chapters, read_schema, resolve_content
from epubkit.utils.exceptions import DanglingNavigationReferenceError


@pytest.fixture
def chapters_of():
    """Build chapters for EPUB bytes while the archive is open."""
    archives = []

    def build(data, on_dangling="raise"):
        archive = EpubArchive(data)
        archives.append(archive)
        schema = read_schema(archive)
        return build_chapters(schema, resolve_content(schema, archive), on_dangling=on_dangling)

    yield build
    for archive in archives:
        archive.close()


def _dangling_epub2(make_epub, epub2_files):
    epub2_files["OEBPS/toc.ncx"] = epub2_files["OEBPS/toc.ncx"].replace(
        '<content src="Text/chapter2.xhtml"/>', '<content src="Text/missing.xhtml"/>'
    )
    return make_epub(epub2_files)


class TestNcxChapters:
    """Chapters built from an NCX."""

    def test_tree(self, chapters_of, epub2_bytes):
        chapters = chapters_of(epub2_bytes)

        assert [chapter.title for chapter in chapters] == ["Chapter 1", "Chapter 2"]
        assert chapters[0].content_file_name == "OEBPS/Text/chapter1.xhtml"
        assert chapters[0].anchor is None

        (section,) = chapters[0].sub_chapters
        assert section.title == "Section 1.1"
        assert section.content_file_name == "OEBPS/Text/chapter1.xhtml"
        assert section.anchor == "sec1"
        assert section.sub_chapters == ()

    def test_html_is_read_on_demand(self, chapters_of, epub2_bytes):
        chapters = chapters_of(epub2_bytes)
        assert "<h1 id=\"start\">Chapter 1</h1>" in chapters[0].read_html_content()
        assert "Café" in chapters[1].read_html_content()

    def test_sibling_directories(self, chapters_of, sibling_bytes):
        chapters = chapters_of(sibling_bytes)
        assert [(c.content_file_name, c.anchor) for c in chapters] == [
            ("content/one.xhtml", "a"),
            ("content/sub/two.xhtml", None),
        ]


class TestNavDocumentChapters:
    """Chapters built from an EPUB 3 navigation document."""

    def test_heading_children_move_up(self, chapters_of, epub3_bytes):
        chapters = chapters_of(epub3_bytes)
        assert [chapter.title for chapter in chapters] == [
            "Loomings",
            "The Carpet-Bag",
            "The Spouter-Inn",
        ]
        assert [chapter.anchor for chapter in chapters] == [None, "sec2", None]
        assert chapters[1].content_file_name == "EPUB/text/ch2.xhtml"

    def test_content_is_bound(self, chapters_of, epub3_bytes):
        chapters = chapters_of(epub3_bytes)
        assert chapters[0].content_file.file_name == "EPUB/text/ch1.xhtml"
        assert "Call me Ishmael." in chapters[0].read_html_content()


class TestSpineFallback:
    """Chapters built from the spine when there is no navigation."""

    def test_one_untitled_chapter_per_spine_item(self, chapters_of, flat_bytes):
        chapters = chapters_of(flat_bytes)
        assert [chapter.content_file_name for chapter in chapters] == ["b.xhtml", "a.html"]
        assert all(chapter.title is None for chapter in chapters)
        assert all(chapter.anchor is None and chapter.sub_chapters == () for chapter in chapters)


class TestDanglingNavigation:
    """Navigation entries pointing at files outside the manifest."""

    def test_raise_policy(self, chapters_of, make_epub, epub2_files):
        with pytest.raises(DanglingNavigationReferenceError) as exc_info:
            chapters_of(_dangling_epub2(make_epub, epub2_files))
        assert exc_info.value.path == "OEBPS/Text/missing.xhtml"
        assert exc_info.value.title == "Chapter 2"

    def test_skip_policy(self, chapters_of, make_epub, epub2_files, caplog):
        data = _dangling_epub2(make_epub, epub2_files)
        with caplog.at_level(logging.WARNING, logger="epubkit"):
            chapters = chapters_of(data, on_dangling="skip")

        assert [chapter.title for chapter in chapters] == ["Chapter 1"]
        assert "OEBPS/Text/missing.xhtml" in caplog.text

    def test_skip_drops_subtree(self, chapters_of, make_epub, epub2_files):
        epub2_files["OEBPS/toc.ncx"] = epub2_files["OEBPS/toc.ncx"].replace(
            '<content src="Text/chapter1.xhtml"/>', '<content src="Text/gone.xhtml"/>'
        )
        chapters = chapters_of(make_epub(epub2_files), on_dangling="skip")
        assert [chapter.title for chapter in chapters] == ["Chapter 2"]
