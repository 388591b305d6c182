"""Pydantic models for the OPF package document."""

from enum import Enum

from pydantic import Field

from .base import EpubModel, LanguageRelatedAttributes


class EpubVersion(str, Enum):
    """EPUB specification version declared by the package."""

    EPUB_2 = "2.0"
    EPUB_3 = "3.0"

    @classmethod
    def from_string(cls, value: str | None) -> "EpubVersion | None":
        """Map a ``version`` attribute to a known version, or None if unsupported."""
        if not value:
            return None
        major = value.strip().split(".", 1)[0]
        if major == "2":
            return cls.EPUB_2
        if major == "3":
            return cls.EPUB_3
        return None


# Metadata entries


class EpubMetadataTitle(LanguageRelatedAttributes):
    id: str | None = None
    value: str


class EpubMetadataAlternateScript(LanguageRelatedAttributes):
    value: str


class EpubMetadataContributor(LanguageRelatedAttributes):
    """A ``dc:contributor``, with role and sort name from attributes or refinements."""

    id: str | None = None
    value: str
    role: str | None = None
    file_as: str | None = None
    alternate_scripts: tuple[EpubMetadataAlternateScript, ...] = ()


class EpubMetadataCreator(EpubMetadataContributor):
    """A ``dc:creator``."""


class EpubMetadataDescription(LanguageRelatedAttributes):
    id: str | None = None
    value: str


class EpubMetadataPublisher(LanguageRelatedAttributes):
    id: str | None = None
    value: str


class EpubMetadataRight(LanguageRelatedAttributes):
    id: str | None = None
    value: str


class EpubMetadataDate(EpubModel):
    id: str | None = None
    value: str
    event: str | None = None


class EpubMetadataIdentifier(EpubModel):
    id: str | None = None
    value: str
    scheme: str | None = None


class EpubMetadataMeta(LanguageRelatedAttributes):
    """A ``<meta>`` element, EPUB 2 (name/content) or EPUB 3 (property/refines) style."""

    id: str | None = None
    name: str | None = None
    content: str | None = None
    text_content: str | None = None
    refines: str | None = None
    property: str | None = None
    scheme: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)


class EpubMetadata(EpubModel):
    """The ``<metadata>`` section. Every list keeps document order."""

    titles: tuple[EpubMetadataTitle, ...] = ()
    creators: tuple[EpubMetadataCreator, ...] = ()
    subjects: tuple[str, ...] = ()
    descriptions: tuple[EpubMetadataDescription, ...] = ()
    publishers: tuple[EpubMetadataPublisher, ...] = ()
    contributors: tuple[EpubMetadataContributor, ...] = ()
    dates: tuple[EpubMetadataDate, ...] = ()
    types: tuple[str, ...] = ()
    formats: tuple[str, ...] = ()
    identifiers: tuple[EpubMetadataIdentifier, ...] = ()
    sources: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    relations: tuple[str, ...] = ()
    coverages: tuple[str, ...] = ()
    rights: tuple[EpubMetadataRight, ...] = ()
    meta_items: tuple[EpubMetadataMeta, ...] = ()

    def find_meta(self, name: str) -> EpubMetadataMeta | None:
        """Return the first EPUB 2 style ``<meta name=...>`` entry."""
        return next((meta for meta in self.meta_items if meta.name == name), None)

    def refinements(self, element_id: str | None, prop: str | None = None) -> list[EpubMetadataMeta]:
        """Return EPUB 3 ``<meta refines="#id">`` entries for an element."""
        if not element_id:
            return []
        target = f"#{element_id}"
        return [
            meta
            for meta in self.meta_items
            if meta.refines == target and (prop is None or meta.property == prop)
        ]


# Manifest, spine and guide


class EpubManifestItem(EpubModel):
    """One manifest resource.

    ``href`` is kept as written in the OPF; ``path`` is that href resolved
    against the package directory and relative to the archive root.
    """

    id: str
    href: str
    media_type: str
    path: str
    properties: tuple[str, ...] = ()
    fallback: str | None = None
    media_overlay: str | None = None


class EpubManifest(EpubModel):
    items: tuple[EpubManifestItem, ...] = ()

    def get(self, item_id: str) -> EpubManifestItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def find_by_path(self, path: str) -> EpubManifestItem | None:
        return next((item for item in self.items if item.path == path), None)

    def find_by_property(self, prop: str) -> EpubManifestItem | None:
        return next((item for item in self.items if prop in item.properties), None)


class EpubSpineItemRef(EpubModel):
    idref: str
    linear: bool = True
    id: str | None = None
    properties: tuple[str, ...] = ()


class EpubSpine(EpubModel):
    id: str | None = None
    toc: str | None = None
    page_progression_direction: str | None = None
    items: tuple[EpubSpineItemRef, ...] = ()


class EpubGuideReference(EpubModel):
    type: str
    title: str | None = None
    href: str
    path: str
    anchor: str | None = None


class EpubGuide(EpubModel):
    references: tuple[EpubGuideReference, ...] = ()


class EpubPackage(LanguageRelatedAttributes):
    """The parsed OPF package document."""

    version: EpubVersion
    unique_identifier: str | None = None
    metadata: EpubMetadata = Field(default_factory=EpubMetadata)
    manifest: EpubManifest
    spine: EpubSpine
    guide: EpubGuide | None = None
