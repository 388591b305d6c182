"""Builds lazy content-file references from the manifest."""

from ..archive import EpubArchive
from ..display import get_logger
from ..models import (
    ByteContentFileRef,
    EpubContentFileRef,
    EpubContentRef,
    EpubContentType,
    EpubSchema,
    TextContentFileRef,
)


logger = get_logger(__name__)

CONTENT_TYPES_BY_MIME = {
    "application/xhtml+xml": EpubContentType.XHTML_1_1,
    "text/html": EpubContentType.XHTML_1_1,
    "application/x-dtbook+xml": EpubContentType.DTBOOK,
    "application/x-dtbncx+xml": EpubContentType.DTBOOK_NCX,
    "text/x-oeb1-document": EpubContentType.OEB1_DOCUMENT,
    "application/xml": EpubContentType.XML,
    "text/css": EpubContentType.CSS,
    "text/x-oeb1-css": EpubContentType.OEB1_CSS,
    "image/gif": EpubContentType.IMAGE_GIF,
    "image/jpeg": EpubContentType.IMAGE_JPEG,
    "image/jpg": EpubContentType.IMAGE_JPEG,
    "image/png": EpubContentType.IMAGE_PNG,
    "image/svg+xml": EpubContentType.IMAGE_SVG,
    "image/bmp": EpubContentType.IMAGE_BMP,
    "image/webp": EpubContentType.IMAGE_WEBP,
    "font/truetype": EpubContentType.FONT_TRUETYPE,
    "font/ttf": EpubContentType.FONT_TRUETYPE,
    "application/x-font-truetype": EpubContentType.FONT_TRUETYPE,
    "application/x-font-ttf": EpubContentType.FONT_TRUETYPE,
    "font/opentype": EpubContentType.FONT_OPENTYPE,
    "font/otf": EpubContentType.FONT_OPENTYPE,
    "application/vnd.ms-opentype": EpubContentType.FONT_OPENTYPE,
    "application/x-font-opentype": EpubContentType.FONT_OPENTYPE,
    "font/woff": EpubContentType.FONT_WOFF,
    "application/font-woff": EpubContentType.FONT_WOFF,
    "font/woff2": EpubContentType.FONT_WOFF2,
}

HTML_CONTENT_TYPES = frozenset({EpubContentType.XHTML_1_1})
CSS_CONTENT_TYPES = frozenset({EpubContentType.CSS, EpubContentType.OEB1_CSS})
IMAGE_CONTENT_TYPES = frozenset(
    {
        EpubContentType.IMAGE_GIF,
        EpubContentType.IMAGE_JPEG,
        EpubContentType.IMAGE_PNG,
        EpubContentType.IMAGE_SVG,
        EpubContentType.IMAGE_BMP,
        EpubContentType.IMAGE_WEBP,
    }
)
FONT_CONTENT_TYPES = frozenset(
    {
        EpubContentType.FONT_TRUETYPE,
        EpubContentType.FONT_OPENTYPE,
        EpubContentType.FONT_WOFF,
        EpubContentType.FONT_WOFF2,
    }
)
TEXT_CONTENT_TYPES = frozenset(
    {
        EpubContentType.XHTML_1_1,
        EpubContentType.DTBOOK,
        EpubContentType.DTBOOK_NCX,
        EpubContentType.OEB1_DOCUMENT,
        EpubContentType.XML,
        EpubContentType.CSS,
        EpubContentType.OEB1_CSS,
    }
)


def content_type_for(media_type: str) -> EpubContentType:
    """Map a manifest media type (parameters ignored) to its content type."""
    mime = media_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPES_BY_MIME.get(mime, EpubContentType.OTHER)


def resolve_content(schema: EpubSchema, archive: EpubArchive) -> EpubContentRef:
    """
    Build one lazy reference per manifest item, keyed by its archive path.

    Items are bucketed into html, css, images and fonts; ``all_files`` holds
    every item. Nothing is read from the archive here.
    """
    html: dict[str, TextContentFileRef] = {}
    css: dict[str, TextContentFileRef] = {}
    images: dict[str, ByteContentFileRef] = {}
    fonts: dict[str, ByteContentFileRef] = {}
    all_files: dict[str, EpubContentFileRef] = {}

    for item in schema.package.manifest.items:
        if item.path in all_files:
            logger.warning("Manifest item %s duplicates path %s", item.id, item.path)
            continue

        content_type = content_type_for(item.media_type)
        ref_class = TextContentFileRef if content_type in TEXT_CONTENT_TYPES else ByteContentFileRef
        ref = ref_class.bind(
            archive,
            file_name=item.path,
            content_type=content_type,
            content_mime_type=item.media_type,
        )
        all_files[item.path] = ref

        if content_type in HTML_CONTENT_TYPES:
            html[item.path] = ref
        elif content_type in CSS_CONTENT_TYPES:
            css[item.path] = ref
        elif content_type in IMAGE_CONTENT_TYPES:
            images[item.path] = ref
        elif content_type in FONT_CONTENT_TYPES:
            fonts[item.path] = ref

    logger.debug(
        "Resolved %d files: %d html, %d css, %d images, %d fonts",
        len(all_files),
        len(html),
        len(css),
        len(images),
        len(fonts),
    )
    return EpubContentRef(html=html, css=css, images=images, fonts=fonts, all_files=all_files)
