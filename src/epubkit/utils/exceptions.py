"""Custom exception hierarchy for epubkit."""


class EpubError(Exception):
    """Base exception for all epubkit errors."""


class MalformedContainerError(EpubError):
    """Raised when the archive or its META-INF/container.xml is missing or invalid."""


class MalformedPackageError(EpubError):
    """Raised when the OPF package document cannot be parsed."""


class MalformedNavigationError(MalformedPackageError):
    """Raised when the NCX or navigation document cannot be parsed."""


class MissingManifestError(MalformedPackageError):
    """Raised when the package has no manifest or references an item it does not declare."""


class DanglingSpineReferenceError(MissingManifestError):
    """Raised when a spine idref (or the spine toc) names an item absent from the manifest."""


class MissingSpineError(MalformedPackageError):
    """Raised when the package has no spine."""


class EntryNotFoundError(EpubError):
    """Raised when a path does not resolve to an entry of the archive."""

    def __init__(self, path: str):
        super().__init__(f"Entry not found in archive: {path}")
        self.path = path


class ArchiveClosedError(EpubError):
    """Raised when content is read after its archive was released."""


class ContentReadError(EpubError):
    """Raised when a single content file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class DanglingNavigationReferenceError(EpubError):
    """Raised when a navigation entry targets a file that is not in the content map."""

    def __init__(self, path: str, title: str | None = None):
        label = f" ({title!r})" if title else ""
        super().__init__(f"Navigation entry{label} points to unknown content file: {path}")
        self.path = path
        self.title = title


class MissingCoverImageError(EpubError):
    """Raised when cover metadata points at a manifest item that does not exist."""


class EpubWriteError(EpubError):
    """Raised when writing an EPUB container fails."""
