"""Reader for the OPF package document."""

import posixpath

from lxml import etree

from ..archive import EpubArchive, resolve_href
from ..display import get_logger
from ..models import (
    EpubGuide,
    EpubGuideReference,
    EpubManifest,
    EpubManifestItem,
    EpubMetadata,
    EpubMetadataAlternateScript,
    EpubMetadataContributor,
    EpubMetadataCreator,
    EpubMetadataDate,
    EpubMetadataDescription,
    EpubMetadataIdentifier,
    EpubMetadataMeta,
    EpubMetadataPublisher,
    EpubMetadataRight,
    EpubMetadataTitle,
    EpubPackage,
    EpubSpine,
    EpubSpineItemRef,
    EpubVersion,
)
from ..utils.exceptions import (
    DanglingSpineReferenceError,
    EntryNotFoundError,
    MalformedContainerError,
    MalformedPackageError,
    MissingManifestError,
    MissingSpineError,
)
from .xml import attr, attributes, child, children, local_name, parse_xml, text


logger = get_logger(__name__)

# Dublin Core elements that are plain strings in the model
_STRING_ELEMENTS = {
    "subject": "subjects",
    "type": "types",
    "format": "formats",
    "source": "sources",
    "language": "languages",
    "relation": "relations",
    "coverage": "coverages",
}


def read_package(archive: EpubArchive, package_path: str) -> EpubPackage:
    """
    Parse the OPF package document at ``package_path``.

    Args:
        archive: Opened EPUB archive
        package_path: Archive path of the OPF document

    Returns:
        The parsed package; every href is resolved against the OPF directory

    Raises:
        MalformedContainerError: If the OPF document is not in the archive
        MalformedPackageError: If the OPF cannot be parsed or declares an unknown version
        MissingManifestError: If the manifest is absent
        MissingSpineError: If the spine is absent
        DanglingSpineReferenceError: If a spine idref is not in the manifest
    """
    try:
        raw = archive.read_bytes(package_path)
    except EntryNotFoundError as e:
        raise MalformedContainerError(f"Package document {package_path} not found") from e

    try:
        root = parse_xml(raw)
    except etree.XMLSyntaxError as e:
        raise MalformedPackageError(f"Cannot parse package document {package_path}: {e}") from e

    if local_name(root.tag) != "package":
        raise MalformedPackageError(f"Unexpected root element <{local_name(root.tag)}> in {package_path}")

    version_attr = attr(root, "version")
    version = EpubVersion.from_string(version_attr)
    if version is None:
        raise MalformedPackageError(f"Unsupported EPUB version: {version_attr!r}")

    base_dir = posixpath.dirname(package_path)

    metadata_node = child(root, "metadata")
    metadata = read_metadata(metadata_node) if metadata_node is not None else EpubMetadata()

    manifest_node = child(root, "manifest")
    if manifest_node is None:
        raise MissingManifestError(f"Package document {package_path} has no manifest")
    manifest = read_manifest(manifest_node, base_dir)

    spine_node = child(root, "spine")
    if spine_node is None:
        raise MissingSpineError(f"Package document {package_path} has no spine")
    spine = read_spine(spine_node, manifest)

    guide_node = child(root, "guide")
    guide = read_guide(guide_node, base_dir) if guide_node is not None else None

    logger.debug(
        "Read package %s: EPUB %s, %d manifest items, %d spine items",
        package_path,
        version.value,
        len(manifest.items),
        len(spine.items),
    )

    return EpubPackage(
        version=version,
        unique_identifier=attr(root, "unique-identifier"),
        metadata=metadata,
        manifest=manifest,
        spine=spine,
        guide=guide,
        lang=attr(root, "lang"),
        dir=attr(root, "dir"),
    )


def read_metadata(node: etree._Element) -> EpubMetadata:
    """Parse ``<metadata>``, applying EPUB 3 refinements to creators and contributors."""
    fields: dict[str, list] = {
        "titles": [],
        "subjects": [],
        "descriptions": [],
        "publishers": [],
        "dates": [],
        "types": [],
        "formats": [],
        "identifiers": [],
        "sources": [],
        "languages": [],
        "relations": [],
        "coverages": [],
        "rights": [],
        "meta_items": [],
    }
    creator_nodes: list[etree._Element] = []
    contributor_nodes: list[etree._Element] = []

    for element in node:
        name = local_name(element.tag)
        value = text(element)
        if name == "meta":
            fields["meta_items"].append(_read_meta(element))
        elif name == "creator":
            creator_nodes.append(element)
        elif name == "contributor":
            contributor_nodes.append(element)
        elif value is None:
            continue
        elif name == "title":
            fields["titles"].append(EpubMetadataTitle(id=attr(element, "id"), value=value, **_lang(element)))
        elif name == "description":
            fields["descriptions"].append(
                EpubMetadataDescription(id=attr(element, "id"), value=value, **_lang(element))
            )
        elif name == "publisher":
            fields["publishers"].append(
                EpubMetadataPublisher(id=attr(element, "id"), value=value, **_lang(element))
            )
        elif name == "rights":
            fields["rights"].append(EpubMetadataRight(id=attr(element, "id"), value=value, **_lang(element)))
        elif name == "date":
            fields["dates"].append(
                EpubMetadataDate(id=attr(element, "id"), value=value, event=attr(element, "event"))
            )
        elif name == "identifier":
            fields["identifiers"].append(
                EpubMetadataIdentifier(id=attr(element, "id"), value=value, scheme=attr(element, "scheme"))
            )
        elif name in _STRING_ELEMENTS:
            fields[_STRING_ELEMENTS[name]].append(value)

    # Refinements are looked up on the metadata read so far
    refined = EpubMetadata(**fields)
    creators = [
        _read_contributor(element, refined, EpubMetadataCreator)
        for element in creator_nodes
        if text(element) is not None
    ]
    contributors = [
        _read_contributor(element, refined, EpubMetadataContributor)
        for element in contributor_nodes
        if text(element) is not None
    ]

    return EpubMetadata(creators=creators, contributors=contributors, **fields)


def _lang(element: etree._Element) -> dict[str, str | None]:
    return {"lang": attr(element, "lang"), "dir": attr(element, "dir")}


def _read_meta(element: etree._Element) -> EpubMetadataMeta:
    return EpubMetadataMeta(
        id=attr(element, "id"),
        name=attr(element, "name"),
        content=attr(element, "content"),
        text_content=text(element),
        refines=attr(element, "refines"),
        property=attr(element, "property"),
        scheme=attr(element, "scheme"),
        attributes=attributes(element),
        **_lang(element),
    )


def _read_contributor(
    element: etree._Element,
    metadata: EpubMetadata,
    model: type[EpubMetadataContributor],
) -> EpubMetadataContributor:
    element_id = attr(element, "id")
    refines = metadata.refinements(element_id)

    def refined(prop: str) -> str | None:
        return next((meta.text_content for meta in refines if meta.property == prop), None)

    alternate_scripts = [
        EpubMetadataAlternateScript(value=meta.text_content, lang=meta.lang, dir=meta.dir)
        for meta in refines
        if meta.property == "alternate-script" and meta.text_content
    ]

    return model(
        id=element_id,
        value=text(element) or "",
        role=attr(element, "role") or refined("role"),
        file_as=attr(element, "file-as") or refined("file-as"),
        alternate_scripts=alternate_scripts,
        **_lang(element),
    )


def read_manifest(node: etree._Element, base_dir: str) -> EpubManifest:
    items: list[EpubManifestItem] = []
    for element in children(node, "item"):
        item_id = attr(element, "id")
        href = attr(element, "href")
        if not item_id or not href:
            logger.warning("Skipping manifest item without id or href: %s", attributes(element))
            continue
        path, _ = resolve_href(href, base_dir)
        items.append(
            EpubManifestItem(
                id=item_id,
                href=href,
                media_type=(attr(element, "media-type") or "").lower(),
                path=path,
                properties=tuple((attr(element, "properties") or "").split()),
                fallback=attr(element, "fallback"),
                media_overlay=attr(element, "media-overlay"),
            )
        )
    return EpubManifest(items=items)


def read_spine(node: etree._Element, manifest: EpubManifest) -> EpubSpine:
    """Parse ``<spine>``; every idref must name a manifest item."""
    item_refs: list[EpubSpineItemRef] = []
    for element in children(node, "itemref"):
        idref = attr(element, "idref")
        if not idref:
            raise MalformedPackageError("Spine itemref without idref")
        if manifest.get(idref) is None:
            raise DanglingSpineReferenceError(f"Spine item {idref!r} is not declared in the manifest")
        item_refs.append(
            EpubSpineItemRef(
                idref=idref,
                linear=(attr(element, "linear") or "yes").lower() != "no",
                id=attr(element, "id"),
                properties=tuple((attr(element, "properties") or "").split()),
            )
        )
    return EpubSpine(
        id=attr(node, "id"),
        toc=attr(node, "toc"),
        page_progression_direction=attr(node, "page-progression-direction"),
        items=item_refs,
    )


def read_guide(node: etree._Element, base_dir: str) -> EpubGuide:
    references: list[EpubGuideReference] = []
    for element in children(node, "reference"):
        ref_type = attr(element, "type")
        href = attr(element, "href")
        if not ref_type or not href:
            logger.debug("Skipping guide reference without type or href")
            continue
        path, anchor = resolve_href(href, base_dir)
        references.append(
            EpubGuideReference(
                type=ref_type,
                title=attr(element, "title"),
                href=href,
                path=path,
                anchor=anchor,
            )
        )
    return EpubGuide(references=references)
