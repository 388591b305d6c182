"""The parsed schema of an EPUB: package plus navigation."""

from .base import EpubModel
from .navigation import EpubNavigation
from .package import EpubPackage


class EpubSchema(EpubModel):
    """Everything read from the container, OPF and navigation documents.

    ``package_path`` is the archive path of the OPF document and
    ``content_directory_path`` its directory ("" when the OPF sits at the root).
    """

    package: EpubPackage
    navigation: EpubNavigation | None = None
    package_path: str
    content_directory_path: str
