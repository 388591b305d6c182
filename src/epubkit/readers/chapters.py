"""Builds the chapter reference tree from navigation and spine."""

from typing import Literal

from ..display import get_logger
from ..models import EpubChapterRef, EpubContentFileRef, EpubContentRef, EpubNavigationPoint, EpubSchema
from ..utils.exceptions import DanglingNavigationReferenceError


logger = get_logger(__name__)

DanglingPolicy = Literal["raise", "skip"]


def build_chapters(
    schema: EpubSchema,
    content: EpubContentRef,
    on_dangling: DanglingPolicy = "raise",
) -> tuple[EpubChapterRef, ...]:
    """
    Build the top-level chapter references of a book.

    With a navigation document, chapters mirror its tree in document order.
    Without one, every spine item becomes an untitled top-level chapter.

    Args:
        schema: Parsed schema
        content: Content references keyed by archive path
        on_dangling: ``raise`` to fail on an entry whose target is not in the
            content map, ``skip`` to log and drop the entry with its subtree

    Raises:
        DanglingNavigationReferenceError: With ``raise``, for an unknown target
    """
    if schema.navigation is None:
        return _chapters_from_spine(schema, content)
    return tuple(_chapters_from_points(schema.navigation.nav_map, content, on_dangling))


def _lookup(content: EpubContentRef, path: str) -> EpubContentFileRef | None:
    return content.html.get(path) or content.all_files.get(path)


def _chapters_from_points(
    points: tuple[EpubNavigationPoint, ...],
    content: EpubContentRef,
    on_dangling: DanglingPolicy,
) -> list[EpubChapterRef]:
    chapters: list[EpubChapterRef] = []
    for point in points:
        if point.content is None or not point.content.path:
            # Heading without a target: its entries move up to this level
            chapters.extend(_chapters_from_points(point.children, content, on_dangling))
            continue

        content_file = _lookup(content, point.content.path)
        if content_file is None:
            if on_dangling == "raise":
                raise DanglingNavigationReferenceError(point.content.path, point.title)
            logger.warning(
                "Skipping navigation entry %r: %s is not in the manifest",
                point.title,
                point.content.path,
            )
            continue

        chapters.append(
            EpubChapterRef.bind(
                content_file,
                title=point.title,
                content_file_name=point.content.path,
                anchor=point.content.anchor,
                sub_chapters=_chapters_from_points(point.children, content, on_dangling),
            )
        )
    return chapters


def _chapters_from_spine(schema: EpubSchema, content: EpubContentRef) -> tuple[EpubChapterRef, ...]:
    manifest = schema.package.manifest
    chapters: list[EpubChapterRef] = []
    for item_ref in schema.package.spine.items:
        # Spine idrefs are checked against the manifest when the package is read
        item = manifest.get(item_ref.idref)
        if item is None:
            continue
        content_file = _lookup(content, item.path)
        if content_file is None:
            continue
        chapters.append(EpubChapterRef.bind(content_file, content_file_name=item.path))
    logger.debug("No navigation document, built %d chapters from the spine", len(chapters))
    return tuple(chapters)
