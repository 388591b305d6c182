"""Data models for epubkit."""

from .base import EpubModel, LanguageRelatedAttributes
from .book import ContentFailure, EpubBook
from .chapter import EpubChapter, EpubChapterBase, EpubChapterRef
from .config import ReaderSettings
from .content import (
    ByteContentFile,
    ByteContentFileRef,
    EpubContent,
    EpubContentFile,
    EpubContentFileRef,
    EpubContentRef,
    EpubContentType,
    EpubResolvedContent,
    TextContentFile,
    TextContentFileRef,
)
from .navigation import (
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
)
from .package import (
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
from .schema import EpubSchema


__all__ = [
    # Base
    "EpubModel",
    "LanguageRelatedAttributes",
    # Book and chapters
    "ContentFailure",
    "EpubBook",
    "EpubChapter",
    "EpubChapterBase",
    "EpubChapterRef",
    # Content
    "ByteContentFile",
    "ByteContentFileRef",
    "EpubContent",
    "EpubContentFile",
    "EpubContentFileRef",
    "EpubContentRef",
    "EpubContentType",
    "EpubResolvedContent",
    "TextContentFile",
    "TextContentFileRef",
    # Navigation
    "EpubNavigation",
    "EpubNavigationContent",
    "EpubNavigationHeadMeta",
    "EpubNavigationLabel",
    "EpubNavigationList",
    "EpubNavigationPageList",
    "EpubNavigationPageTarget",
    "EpubNavigationPoint",
    "EpubNavigationSource",
    "EpubNavigationTarget",
    # Package
    "EpubGuide",
    "EpubGuideReference",
    "EpubManifest",
    "EpubManifestItem",
    "EpubMetadata",
    "EpubMetadataAlternateScript",
    "EpubMetadataContributor",
    "EpubMetadataCreator",
    "EpubMetadataDate",
    "EpubMetadataDescription",
    "EpubMetadataIdentifier",
    "EpubMetadataMeta",
    "EpubMetadataPublisher",
    "EpubMetadataRight",
    "EpubMetadataTitle",
    "EpubPackage",
    "EpubSchema",
    "EpubSpine",
    "EpubSpineItemRef",
    "EpubVersion",
    # Configuration
    "ReaderSettings",
]
