"""Rich-based display system for epubkit."""

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .constants import EMOJI_MAP, STYLES


if TYPE_CHECKING:
    from ..book_ref import EpubBookRef
    from ..models import EpubChapterBase


class RichDisplay:
    """
    Rich-based display system for epubkit.

    Renders book metadata, chapter trees and status messages for the CLI.
    """

    def __init__(self, quiet: bool = False, console: Console | None = None):
        """
        Initialize RichDisplay.

        Args:
            quiet: If True, suppress all output except errors
            console: Console to print to (default: stdout)
        """
        self.console = console or Console()
        self.quiet = quiet

    def book_info(self, book: "EpubBookRef") -> None:
        """
        Display book metadata in a Rich Table.

        Args:
            book: Opened book reference
        """
        if self.quiet:
            return

        package = book.epub_schema.package
        metadata = package.metadata

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Field", style="bold cyan", no_wrap=True)
        table.add_column("Value", style=STYLES["book_info"])

        table.add_row(f"{EMOJI_MAP['book']} Title", escape(book.title) or "N/A")
        table.add_row(f"{EMOJI_MAP['author']} Author", escape(book.author) or "N/A")

        if metadata.publishers:
            table.add_row(f"{EMOJI_MAP['publisher']} Publisher", escape(metadata.publishers[0].value))
        if metadata.dates:
            table.add_row(f"{EMOJI_MAP['date']} Published", escape(metadata.dates[0].value))
        if metadata.identifiers:
            table.add_row(f"{EMOJI_MAP['identifier']} Identifier", escape(metadata.identifiers[0].value))
        if metadata.languages:
            table.add_row("Language", escape(", ".join(metadata.languages)))

        table.add_row("EPUB version", package.version.value)
        table.add_row(
            f"{EMOJI_MAP['files']} Files",
            f"{len(book.content.html)} html, {len(book.content.css)} css, "
            f"{len(book.content.images)} images, {len(book.content.fonts)} fonts",
        )

        panel = Panel(
            table,
            title="[bold green]Book Information[/bold green]",
            border_style="green",
            padding=(1, 2),
        )
        self.console.print(panel)

    def chapter_tree(self, title: str, chapters: "tuple[EpubChapterBase, ...]") -> None:
        """
        Display the chapter hierarchy as a tree.

        Args:
            title: Label of the tree root
            chapters: Top-level chapters
        """
        if self.quiet:
            return

        tree = Tree(f"[{STYLES['book_title']}]{EMOJI_MAP['chapters']} {escape(title) or 'Untitled'}")
        self._add_chapters(tree, chapters)
        self.console.print(tree)

    def _add_chapters(self, node: Tree, chapters: "tuple[EpubChapterBase, ...]") -> None:
        for chapter in chapters:
            label = escape(chapter.title) if chapter.title else "(untitled)"
            target = chapter.content_file_name
            if chapter.anchor:
                target = f"{target}#{chapter.anchor}"
            branch = node.add(f"{label} [{STYLES['anchor']}]{escape(target)}[/{STYLES['anchor']}]")
            self._add_chapters(branch, chapter.sub_chapters)

    def error(self, message: str) -> None:
        """
        Display error message with Rich formatting.

        Args:
            message: Error message to display
        """
        self.console.print(f"[bold red]{EMOJI_MAP['error']} Error:[/bold red] {message}")

    def success(self, message: str) -> None:
        """
        Display success message.

        Args:
            message: Success message to display
        """
        if self.quiet:
            return
        self.console.print(f"[bold green]{EMOJI_MAP['success']} {message}[/bold green]")
