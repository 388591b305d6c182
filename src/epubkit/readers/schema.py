"""Reader for the OCF container and the complete EPUB schema."""

import posixpath

from lxml import etree

from ..archive import EpubArchive, normalize_path
from ..display import get_logger
from ..models import EpubSchema
from ..utils.exceptions import EntryNotFoundError, MalformedContainerError
from .navigation import read_navigation
from .package import read_package
from .xml import attr, descendants, parse_xml


logger = get_logger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
OPF_MEDIA_TYPE = "application/oebps-package+xml"


def read_package_path(archive: EpubArchive) -> str:
    """
    Locate the OPF package document through ``META-INF/container.xml``.

    The first rootfile with the OPF media type is used, or the first rootfile
    when none declares it.

    Raises:
        MalformedContainerError: If the descriptor is missing, unparsable or has no rootfile
    """
    try:
        raw = archive.read_bytes(CONTAINER_PATH)
    except EntryNotFoundError as e:
        raise MalformedContainerError(f"{CONTAINER_PATH} not found") from e

    try:
        root = parse_xml(raw)
    except etree.XMLSyntaxError as e:
        raise MalformedContainerError(f"Cannot parse {CONTAINER_PATH}: {e}") from e

    rootfiles = [node for node in descendants(root, "rootfile") if attr(node, "full-path")]
    if not rootfiles:
        raise MalformedContainerError(f"{CONTAINER_PATH} declares no rootfile")

    rootfile = next(
        (node for node in rootfiles if attr(node, "media-type") == OPF_MEDIA_TYPE), rootfiles[0]
    )
    package_path = normalize_path(attr(rootfile, "full-path") or "")
    if not package_path:
        raise MalformedContainerError(f"{CONTAINER_PATH} rootfile has an empty full-path")
    return package_path


def read_schema(archive: EpubArchive) -> EpubSchema:
    """
    Read container, package and navigation documents into an EpubSchema.

    Parsing is all-or-nothing: any failure raises and no partial schema is returned.
    """
    package_path = read_package_path(archive)
    logger.debug("Package document at %s", package_path)

    package = read_package(archive, package_path)
    navigation = read_navigation(archive, package)

    return EpubSchema(
        package=package,
        navigation=navigation,
        package_path=package_path,
        content_directory_path=posixpath.dirname(package_path),
    )
