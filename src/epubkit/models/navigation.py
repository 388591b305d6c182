"""Pydantic models for NCX and EPUB 3 navigation documents."""

from enum import Enum

from .base import EpubModel


class EpubNavigationSource(str, Enum):
    """Which document the navigation tree was read from."""

    NCX = "ncx"
    NAV = "nav"


class EpubNavigationHeadMeta(EpubModel):
    name: str | None = None
    content: str | None = None
    scheme: str | None = None


class EpubNavigationLabel(EpubModel):
    text: str


class EpubNavigationContent(EpubModel):
    """Target of a navigation entry.

    ``source`` is the raw ``src``/``href``; ``path`` is its file part resolved
    against the navigation document, and ``anchor`` its fragment.
    """

    id: str | None = None
    source: str
    path: str
    anchor: str | None = None


class EpubNavigationPoint(EpubModel):
    """A table of contents entry with its nested entries in document order.

    Heading-only entries of an EPUB 3 nav document have no ``content``.
    """

    id: str | None = None
    point_class: str | None = None
    play_order: str | None = None
    labels: tuple[EpubNavigationLabel, ...] = ()
    content: EpubNavigationContent | None = None
    children: tuple["EpubNavigationPoint", ...] = ()

    @property
    def title(self) -> str | None:
        return self.labels[0].text if self.labels else None


class EpubNavigationPageTarget(EpubModel):
    id: str | None = None
    value: str | None = None
    type: str | None = None
    point_class: str | None = None
    play_order: str | None = None
    labels: tuple[EpubNavigationLabel, ...] = ()
    content: EpubNavigationContent | None = None


class EpubNavigationPageList(EpubModel):
    id: str | None = None
    targets: tuple[EpubNavigationPageTarget, ...] = ()


class EpubNavigationTarget(EpubModel):
    id: str | None = None
    value: str | None = None
    point_class: str | None = None
    play_order: str | None = None
    labels: tuple[EpubNavigationLabel, ...] = ()
    content: EpubNavigationContent | None = None


class EpubNavigationList(EpubModel):
    """An NCX ``navList``, or a secondary EPUB 3 ``<nav>`` such as landmarks."""

    id: str | None = None
    point_class: str | None = None
    labels: tuple[EpubNavigationLabel, ...] = ()
    targets: tuple[EpubNavigationTarget, ...] = ()


class EpubNavigation(EpubModel):
    source: EpubNavigationSource
    path: str
    head: tuple[EpubNavigationHeadMeta, ...] = ()
    doc_title: tuple[str, ...] = ()
    doc_authors: tuple[str, ...] = ()
    nav_map: tuple[EpubNavigationPoint, ...] = ()
    page_list: EpubNavigationPageList | None = None
    nav_lists: tuple[EpubNavigationList, ...] = ()


# Enable forward references for recursive navigation points
EpubNavigationPoint.model_rebuild()
