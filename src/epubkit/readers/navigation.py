"""Readers for NCX and EPUB 3 navigation documents."""

import itertools
import posixpath

from lxml import etree

from ..archive import EpubArchive, resolve_href
from ..display import get_logger
from ..models import (
    EpubManifestItem,
    EpubNavigation,
    EpubNavigationContent,
    EpubNavigationHeadMeta,
    EpubNavigationLabel,
    EpubNavigationList,
    EpubNavigationPageList,
    EpubNavigationPageTarget,
    EpubNavigationPoint,
    EpubNavigationSource,
    EpubNavigationTarget,
    EpubPackage,
)
from ..utils.exceptions import (
    DanglingSpineReferenceError,
    EntryNotFoundError,
    MalformedNavigationError,
)
from .xml import attr, child, children, descendants, local_name, parse_xhtml, parse_xml, text


logger = get_logger(__name__)

NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


def find_navigation_item(package: EpubPackage) -> tuple[EpubManifestItem, EpubNavigationSource] | None:
    """
    Pick the navigation document of a package.

    An EPUB 3 nav document (manifest ``properties="nav"``) wins; otherwise the
    NCX named by the spine ``toc`` attribute, then any NCX in the manifest.

    Raises:
        DanglingSpineReferenceError: If the spine ``toc`` names an unknown item
    """
    nav_item = package.manifest.find_by_property("nav")
    if nav_item is not None:
        return nav_item, EpubNavigationSource.NAV

    toc_id = package.spine.toc
    if toc_id:
        ncx_item = package.manifest.get(toc_id)
        if ncx_item is None:
            raise DanglingSpineReferenceError(f"Spine toc {toc_id!r} is not declared in the manifest")
        return ncx_item, EpubNavigationSource.NCX

    ncx_item = next(
        (item for item in package.manifest.items if item.media_type == NCX_MEDIA_TYPE), None
    )
    if ncx_item is not None:
        return ncx_item, EpubNavigationSource.NCX
    return None


def read_navigation(archive: EpubArchive, package: EpubPackage) -> EpubNavigation | None:
    """Read the navigation tree of a package, or None when the book has no navigation document."""
    found = find_navigation_item(package)
    if found is None:
        logger.debug("No navigation document declared")
        return None

    item, source = found
    try:
        raw = archive.read_bytes(item.path)
    except EntryNotFoundError as e:
        raise MalformedNavigationError(f"Navigation document {item.path} is not in the archive") from e
    if source == EpubNavigationSource.NAV:
        return read_nav_document(raw, item.path)
    return read_ncx(raw, item.path)


# NCX


def read_ncx(raw: bytes, path: str) -> EpubNavigation:
    """Parse an NCX document located at ``path``."""
    try:
        root = parse_xml(raw)
    except etree.XMLSyntaxError as e:
        raise MalformedNavigationError(f"Cannot parse NCX {path}: {e}") from e
    if local_name(root.tag) != "ncx":
        raise MalformedNavigationError(f"Unexpected root element <{local_name(root.tag)}> in {path}")

    base_dir = posixpath.dirname(path)

    head_node = child(root, "head")
    head = [
        EpubNavigationHeadMeta(
            name=attr(meta, "name"),
            content=attr(meta, "content"),
            scheme=attr(meta, "scheme"),
        )
        for meta in (children(head_node, "meta") if head_node is not None else [])
    ]

    doc_title = [
        value for node in children(root, "docTitle") if (value := text(child(node, "text")))
    ]
    doc_authors = [
        value for node in children(root, "docAuthor") if (value := text(child(node, "text")))
    ]

    nav_map_node = child(root, "navMap")
    if nav_map_node is None:
        raise MalformedNavigationError(f"NCX {path} has no navMap")
    nav_map = [_read_nav_point(node, base_dir) for node in children(nav_map_node, "navPoint")]

    page_list_node = child(root, "pageList")
    page_list = None
    if page_list_node is not None:
        page_list = EpubNavigationPageList(
            id=attr(page_list_node, "id"),
            targets=[
                EpubNavigationPageTarget(
                    id=attr(node, "id"),
                    value=attr(node, "value"),
                    type=attr(node, "type"),
                    point_class=attr(node, "class"),
                    play_order=attr(node, "playOrder"),
                    labels=_read_labels(node),
                    content=_read_ncx_content(node, base_dir),
                )
                for node in children(page_list_node, "pageTarget")
            ],
        )

    nav_lists = [
        EpubNavigationList(
            id=attr(node, "id"),
            point_class=attr(node, "class"),
            labels=_read_labels(node),
            targets=[
                EpubNavigationTarget(
                    id=attr(target, "id"),
                    value=attr(target, "value"),
                    point_class=attr(target, "class"),
                    play_order=attr(target, "playOrder"),
                    labels=_read_labels(target),
                    content=_read_ncx_content(target, base_dir),
                )
                for target in children(node, "navTarget")
            ],
        )
        for node in children(root, "navList")
    ]

    return EpubNavigation(
        source=EpubNavigationSource.NCX,
        path=path,
        head=head,
        doc_title=doc_title,
        doc_authors=doc_authors,
        nav_map=nav_map,
        page_list=page_list,
        nav_lists=nav_lists,
    )


def _read_labels(node: etree._Element) -> list[EpubNavigationLabel]:
    labels = []
    for label in children(node, "navLabel"):
        value = text(child(label, "text"))
        if value is not None:
            labels.append(EpubNavigationLabel(text=value))
    return labels


def _read_ncx_content(node: etree._Element, base_dir: str) -> EpubNavigationContent | None:
    content = child(node, "content")
    source = attr(content, "src") if content is not None else None
    if content is None or source is None:
        return None
    path, anchor = resolve_href(source, base_dir)
    return EpubNavigationContent(id=attr(content, "id"), source=source, path=path, anchor=anchor)


def _read_nav_point(node: etree._Element, base_dir: str) -> EpubNavigationPoint:
    return EpubNavigationPoint(
        id=attr(node, "id"),
        point_class=attr(node, "class"),
        play_order=attr(node, "playOrder"),
        labels=_read_labels(node),
        content=_read_ncx_content(node, base_dir),
        children=[_read_nav_point(sub, base_dir) for sub in children(node, "navPoint")],
    )


# EPUB 3 navigation document


def _nav_types(node: etree._Element) -> list[str]:
    return (attr(node, "type") or "").split()


def read_nav_document(raw: bytes, path: str) -> EpubNavigation:
    """Parse an EPUB 3 XHTML navigation document located at ``path``.

    The ``toc`` nav becomes the navigation map, ``page-list`` the page list
    and every other nav (landmarks, lists of figures...) a navigation list.
    """
    try:
        root = parse_xhtml(raw)
    except (etree.ParserError, etree.XMLSyntaxError) as e:
        raise MalformedNavigationError(f"Cannot parse navigation document {path}: {e}") from e

    base_dir = posixpath.dirname(path)
    nav_nodes = descendants(root, "nav")
    if not nav_nodes:
        raise MalformedNavigationError(f"Navigation document {path} has no <nav> element")

    toc_node = next((node for node in nav_nodes if "toc" in _nav_types(node)), nav_nodes[0])
    play_order = itertools.count(1)

    toc_list = _first_list(toc_node)
    nav_map = _read_nav_list_items(toc_list, base_dir, play_order) if toc_list is not None else []

    page_list = None
    nav_lists = []
    for node in nav_nodes:
        if node is toc_node:
            continue
        targets = _flatten_targets(node, base_dir)
        if "page-list" in _nav_types(node):
            page_list = EpubNavigationPageList(
                id=attr(node, "id"),
                targets=[
                    EpubNavigationPageTarget(
                        id=target.id,
                        value=target.labels[0].text if target.labels else None,
                        type="normal",
                        play_order=target.play_order,
                        labels=target.labels,
                        content=target.content,
                    )
                    for target in targets
                ],
            )
        else:
            nav_lists.append(
                EpubNavigationList(
                    id=attr(node, "id"),
                    point_class=attr(node, "type"),
                    labels=[EpubNavigationLabel(text=heading)] if (heading := _heading(node)) else [],
                    targets=targets,
                )
            )

    title_node = next(iter(descendants(root, "title")), None)
    doc_title = [value] if (value := text(title_node) or _heading(toc_node)) else []

    return EpubNavigation(
        source=EpubNavigationSource.NAV,
        path=path,
        doc_title=doc_title,
        nav_map=nav_map,
        page_list=page_list,
        nav_lists=nav_lists,
    )


def _first_list(node: etree._Element) -> etree._Element | None:
    # Outermost list in document order, whether ordered or not
    lists = (element for element in node.iterdescendants() if local_name(element.tag) in ("ol", "ul"))
    return next(lists, None)


def _heading(node: etree._Element) -> str | None:
    for name in ("h1", "h2", "h3", "h4", "h5", "h6"):
        heading = child(node, name)
        if heading is not None:
            return text(heading)
    return None


def _read_nav_list_items(
    list_node: etree._Element, base_dir: str, play_order: "itertools.count[int]"
) -> list[EpubNavigationPoint]:
    points = []
    for item in children(list_node, "li"):
        link = child(item, "a")
        label_node = link if link is not None else child(item, "span")
        label = text(label_node)
        content = None
        href = attr(link, "href") if link is not None else None
        if href is not None:
            target_path, anchor = resolve_href(href, base_dir)
            content = EpubNavigationContent(source=href, path=target_path, anchor=anchor)
        sub_list = child(item, "ol")
        if sub_list is None:
            sub_list = child(item, "ul")
        points.append(
            EpubNavigationPoint(
                id=attr(item, "id") or (attr(link, "id") if link is not None else None),
                play_order=str(next(play_order)),
                labels=[EpubNavigationLabel(text=label)] if label else [],
                content=content,
                children=_read_nav_list_items(sub_list, base_dir, play_order) if sub_list is not None else [],
            )
        )
    return points


def _flatten_targets(node: etree._Element, base_dir: str) -> list[EpubNavigationTarget]:
    targets = []
    for order, link in enumerate(descendants(node, "a"), start=1):
        href = attr(link, "href")
        if href is None:
            continue
        target_path, anchor = resolve_href(href, base_dir)
        label = text(link)
        targets.append(
            EpubNavigationTarget(
                id=attr(link, "id"),
                point_class=attr(link, "type"),
                play_order=str(order),
                labels=[EpubNavigationLabel(text=label)] if label else [],
                content=EpubNavigationContent(source=href, path=target_path, anchor=anchor),
            )
        )
    return targets
