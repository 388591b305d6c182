"""Shared pytest fixtures and configuration for epubkit tests.

Every fixture book is assembled in memory with zipfile, so the tests need no
files on disk apart from the ones a test writes to ``tmp_path`` itself.
"""

import io
import os
import zipfile
from collections.abc import Callable

import pytest


CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-data"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-data"
TTF_BYTES = b"\x00\x01\x00\x00fake-ttf-data"


def container_xml(package_path: str) -> str:
    return CONTAINER_XML.format(path=package_path)


def xhtml(title: str, body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head><title>{title}</title></head><body>{body}</body></html>"
    )


def build_epub(files: dict[str, str | bytes], mimetype: bool = True) -> bytes:
    """Zip ``files`` into an EPUB container, ``mimetype`` first and stored."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if mimetype:
            archive.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, data in files.items():
            archive.writestr(name, data, compress_type=zipfile.ZIP_DEFLATED)
    return buffer.getvalue()


EPUB2_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="bookid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>Test-Driven Development with Python</dc:title>
    <dc:creator opf:role="aut" opf:file-as="Percival, Harry">Harry Percival</dc:creator>
    <dc:creator opf:role="aut">Jane Smith</dc:creator>
    <dc:language>en</dc:language>
    <dc:identifier id="bookid" opf:scheme="ISBN">9781491958698</dc:identifier>
    <dc:publisher>O'Reilly Media, Inc.</dc:publisher>
    <dc:date opf:event="publication">2017-08-18</dc:date>
    <dc:subject>Python</dc:subject>
    <dc:subject>Testing</dc:subject>
    <meta name="cover" content="cover-image"/>
  </metadata>
  <manifest>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="chapter1" href="Text/chapter1.xhtml" media-type="application/xhtml+xml"/>
    <item id="chapter2" href="Text/chapter2.xhtml" media-type="application/xhtml+xml"/>
    <item id="style" href="Styles/style.css" media-type="text/css"/>
    <item id="cover-image" href="Images/cover.jpg" media-type="image/jpeg"/>
    <item id="font" href="Fonts/serif.ttf" media-type="font/ttf"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="chapter1"/>
    <itemref idref="chapter2" linear="no"/>
  </spine>
  <guide>
    <reference type="text" title="Start" href="Text/chapter1.xhtml#start"/>
  </guide>
</package>
"""

EPUB2_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="9781491958698"/>
    <meta name="dtb:depth" content="2"/>
  </head>
  <docTitle><text>Test-Driven Development with Python</text></docTitle>
  <docAuthor><text>Harry Percival</text></docAuthor>
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text>Chapter 1</text></navLabel>
      <content src="Text/chapter1.xhtml"/>
      <navPoint id="np2" playOrder="2">
        <navLabel><text>Section 1.1</text></navLabel>
        <content src="Text/chapter1.xhtml#sec1"/>
      </navPoint>
    </navPoint>
    <navPoint id="np3" playOrder="3">
      <navLabel><text>Chapter 2</text></navLabel>
      <content src="Text/chapter2.xhtml"/>
    </navPoint>
  </navMap>
  <pageList>
    <pageTarget id="page1" value="1" type="normal" playOrder="4">
      <navLabel><text>1</text></navLabel>
      <content src="Text/chapter1.xhtml#page1"/>
    </pageTarget>
  </pageList>
</ncx>
"""

EPUB3_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid" xml:lang="en">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:0b9c3a4e-5a1d-4e5b-9c8f-1d2e3f4a5b6c</dc:identifier>
    <dc:title id="title">Moby-Dick</dc:title>
    <dc:creator id="creator">Herman Melville</dc:creator>
    <meta refines="#creator" property="role" scheme="marc:relators">aut</meta>
    <meta refines="#creator" property="file-as">Melville, Herman</meta>
    <dc:language>en</dc:language>
    <meta property="dcterms:modified">2024-01-01T00:00:00Z</meta>
  </metadata>
  <manifest>
    <item id="nav" href="nav/toc.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="ch1" href="text/ch1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="text/ch2.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch3" href="text/ch3.xhtml" media-type="application/xhtml+xml"/>
    <item id="cover" href="images/cover.png" media-type="image/png" properties="cover-image"/>
  </manifest>
  <spine>
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
    <itemref idref="ch3"/>
  </spine>
</package>
"""

EPUB3_NAV = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head><title>Moby-Dick</title></head>
<body>
  <nav epub:type="toc" id="toc">
    <h1>Contents</h1>
    <ol>
      <li><a href="../text/ch1.xhtml">Loomings</a></li>
      <li><span>Part Two</span>
        <ol>
          <li><a href="../text/ch2.xhtml#sec2">The Carpet-Bag</a></li>
          <li><a href="../text/ch3.xhtml">The Spouter-Inn</a></li>
        </ol>
      </li>
    </ol>
  </nav>
  <nav epub:type="landmarks" id="landmarks">
    <h2>Guide</h2>
    <ol>
      <li><a epub:type="bodymatter" href="../text/ch1.xhtml">Start of Content</a></li>
    </ol>
  </nav>
</body>
</html>
"""

FLAT_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="id">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Flat Book</dc:title>
    <dc:identifier id="id">flat-1</dc:identifier>
  </metadata>
  <manifest>
    <item id="a" href="a.html" media-type="text/html"/>
    <item id="b" href="b.xhtml" media-type="application/xhtml+xml"/>
    <item id="notes" href="notes.txt" media-type="text/plain"/>
  </manifest>
  <spine>
    <itemref idref="b"/>
    <itemref idref="a"/>
  </spine>
</package>
"""

SIBLING_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<opf:package xmlns:opf="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="id">
  <opf:metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Sibling Directories</dc:title>
    <dc:creator>Ann Author</dc:creator>
    <dc:identifier id="id">sibling-1</dc:identifier>
  </opf:metadata>
  <opf:manifest>
    <opf:item id="toc" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <opf:item id="c1" href="../content/one.xhtml" media-type="application/xhtml+xml"/>
    <opf:item id="c2" href="../content/sub/two.xhtml" media-type="application/xhtml+xml"/>
  </opf:manifest>
  <opf:spine toc="toc">
    <opf:itemref idref="c1"/>
    <opf:itemref idref="c2"/>
  </opf:spine>
</opf:package>
"""

SIBLING_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head/>
  <docTitle><text>Sibling Directories</text></docTitle>
  <navMap>
    <navPoint id="n1" playOrder="1">
      <navLabel><text>One</text></navLabel>
      <content src="../content/one.xhtml#a"/>
    </navPoint>
    <navPoint id="n2" playOrder="2">
      <navLabel><text>Two</text></navLabel>
      <content src="../content/sub/two.xhtml"/>
    </navPoint>
  </navMap>
</ncx>
"""


@pytest.fixture(autouse=True)
def clean_epubkit_env(monkeypatch):
    """Keep EPUBKIT_* variables of the calling shell out of ReaderSettings."""
    for name in list(os.environ):
        if name.upper().startswith("EPUBKIT_"):
            monkeypatch.delenv(name)


@pytest.fixture
def make_epub() -> Callable[..., bytes]:
    """Factory zipping a ``{path: data}`` mapping into EPUB bytes."""
    return build_epub


@pytest.fixture
def epub2_files() -> dict[str, str | bytes]:
    """EPUB 2 book with the package under OEBPS/, an NCX and a cover meta."""
    return {
        "META-INF/container.xml": container_xml("OEBPS/content.opf"),
        "OEBPS/content.opf": EPUB2_OPF,
        "OEBPS/toc.ncx": EPUB2_NCX,
        "OEBPS/Text/chapter1.xhtml": xhtml(
            "Chapter 1", '<h1 id="start">Chapter 1</h1><p id="sec1">Section 1.1</p>'
        ),
        "OEBPS/Text/chapter2.xhtml": xhtml("Chapter 2", "<h1>Chapter 2</h1><p>Café</p>"),
        "OEBPS/Styles/style.css": "body { margin: 0; }",
        "OEBPS/Images/cover.jpg": JPEG_BYTES,
        "OEBPS/Fonts/serif.ttf": TTF_BYTES,
    }


@pytest.fixture
def epub2_bytes(epub2_files) -> bytes:
    return build_epub(epub2_files)


@pytest.fixture
def epub3_files() -> dict[str, str | bytes]:
    """EPUB 3 book whose nav document sits in a sibling directory of the chapters."""
    return {
        "META-INF/container.xml": container_xml("EPUB/package.opf"),
        "EPUB/package.opf": EPUB3_OPF,
        "EPUB/nav/toc.xhtml": EPUB3_NAV,
        "EPUB/text/ch1.xhtml": xhtml("Loomings", "<h1>Loomings</h1><p>Call me Ishmael.</p>"),
        "EPUB/text/ch2.xhtml": xhtml("The Carpet-Bag", '<h1 id="sec2">The Carpet-Bag</h1>'),
        "EPUB/text/ch3.xhtml": xhtml("The Spouter-Inn", "<h1>The Spouter-Inn</h1>"),
        "EPUB/images/cover.png": PNG_BYTES,
    }


@pytest.fixture
def epub3_bytes(epub3_files) -> bytes:
    return build_epub(epub3_files)


@pytest.fixture
def flat_files() -> dict[str, str | bytes]:
    """Book with the package at the archive root and no navigation document."""
    return {
        "META-INF/container.xml": container_xml("content.opf"),
        "content.opf": FLAT_OPF,
        "a.html": "<html><head><title>A</title></head><body><p>A</p></body></html>",
        "b.xhtml": xhtml("B", "<p>B</p>"),
        "notes.txt": b"plain notes",
    }


@pytest.fixture
def flat_bytes(flat_files) -> bytes:
    return build_epub(flat_files)


@pytest.fixture
def sibling_files() -> dict[str, str | bytes]:
    """Book whose package/ and content/ directories are siblings."""
    return {
        "META-INF/container.xml": container_xml("package/content.opf"),
        "package/content.opf": SIBLING_OPF,
        "package/toc.ncx": SIBLING_NCX,
        "content/one.xhtml": xhtml("One", '<p id="a">One</p>'),
        "content/sub/two.xhtml": xhtml("Two", "<p>Two</p>"),
    }


@pytest.fixture
def sibling_bytes(sibling_files) -> bytes:
    return build_epub(sibling_files)


@pytest.fixture
def epub2_path(tmp_path, epub2_bytes):
    """The EPUB 2 fixture book written to disk."""
    path = tmp_path / "book.epub"
    path.write_bytes(epub2_bytes)
    return path


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
