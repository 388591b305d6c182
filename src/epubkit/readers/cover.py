"""Locates the cover image of a package."""

from ..display import get_logger
from ..models import EpubManifestItem, EpubSchema
from ..utils.exceptions import MissingCoverImageError


logger = get_logger(__name__)


def find_cover_item(schema: EpubSchema) -> EpubManifestItem | None:
    """
    Find the manifest item holding the cover image.

    EPUB 3 ``properties="cover-image"`` is checked first, then the EPUB 2
    ``<meta name="cover" content="item-id">`` convention. A book without
    cover metadata has no cover; that is not an error.

    Raises:
        MissingCoverImageError: If the cover meta names an unknown manifest item
    """
    manifest = schema.package.manifest
    item = manifest.find_by_property("cover-image")
    if item is not None:
        return item

    cover_meta = schema.package.metadata.find_meta("cover")
    if cover_meta is None or not cover_meta.content:
        logger.debug("No cover metadata")
        return None

    item = manifest.get(cover_meta.content)
    if item is None:
        # Some producers point the meta at the image path instead of its id
        item = next(
            (candidate for candidate in manifest.items if candidate.href == cover_meta.content), None
        )
    if item is None:
        raise MissingCoverImageError(
            f"Cover metadata points to {cover_meta.content!r}, which is not in the manifest"
        )
    return item
