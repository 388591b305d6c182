"""Namespace-agnostic helpers over lxml trees.

OPF, NCX and XHTML navigation documents mix default and prefixed namespaces
inconsistently in the wild, so elements and attributes are matched by local
name only.
"""

from lxml import etree
from lxml import html as lxml_html


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def parse_xml(data: bytes) -> etree._Element:
    """Parse an XML document. Raises ``etree.XMLSyntaxError`` on malformed input."""
    return etree.fromstring(data, parser=_xml_parser())


def parse_xhtml(data: bytes) -> etree._Element:
    """Parse an XHTML document, falling back to the HTML parser for tag soup."""
    try:
        return parse_xml(data)
    except etree.XMLSyntaxError:
        return lxml_html.document_fromstring(data)


def local_name(tag: object) -> str:
    if not tag or not isinstance(tag, str):
        return ""
    if "}" in tag:
        return tag.split("}", 1)[1]
    if ":" in tag:
        return tag.split(":", 1)[1]
    return tag


def child(node: etree._Element, name: str) -> etree._Element | None:
    for element in node:
        if local_name(element.tag) == name:
            return element
    return None


def children(node: etree._Element, name: str) -> list[etree._Element]:
    return [element for element in node if local_name(element.tag) == name]


def descendants(node: etree._Element, name: str) -> list[etree._Element]:
    return [element for element in node.iter() if local_name(element.tag) == name]


def attr(node: etree._Element, name: str) -> str | None:
    """Attribute value by local name (``opf:role``, ``xml:lang`` and ``role`` all match)."""
    value = node.get(name)
    if value is None:
        for key, candidate in node.attrib.items():
            if local_name(key) == name:
                value = candidate
                break
    if value is None:
        return None
    value = value.strip()
    return value or None


def attributes(node: etree._Element) -> dict[str, str]:
    return {local_name(key): value for key, value in node.attrib.items()}


def text(node: etree._Element | None) -> str | None:
    if node is None:
        return None
    value = " ".join("".join(node.itertext()).split())
    return value or None
