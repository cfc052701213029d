import json
import os
from typing import Iterable, List

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from booklist.book import Book
from booklist.config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKLIST_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

EMPTY_MESSAGE = "No books found."

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()


def book_card(book: Book) -> Panel:
    """A single book rendered as a card."""
    # Stored values are arbitrary text, so nothing here goes through markup
    body = Text.assemble(
        (book.title, "bold"),
        "\n",
        ("Author:", "dim"),
        f" {book.author}\n",
        (book.category, "cyan"),
        "\n",
        ("cover", Style(link=book.image_url)),
    )
    return Panel.fit(body, border_style="blue")


def print_books(books: Iterable[Book], console: Console = None) -> None:
    """Print books in the current output mode.
    - plain: 'Title by Author [Category]' lines, or EMPTY_MESSAGE
    - json: JSON array in the storage layout
    - rich: one card per book
    """
    console = console or _console
    items: List[Book] = list(books)
    mode = get_output_mode()

    if not items:
        print(EMPTY_MESSAGE)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in items], ensure_ascii=False))
    elif mode == "rich":
        console.print(Columns([book_card(b) for b in items]))
    else:
        for b in items:
            print(f"{b.title} by {b.author} [{b.category}]")


def print_books_table(books: Iterable[Book], title: str = "📚 Books", console: Console = None) -> None:
    console = console or _console
    items = list(books)
    if not items:
        console.print(f"[yellow]{EMPTY_MESSAGE}[/]")
        return

    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Category", style="magenta")
    for i, b in enumerate(items, 1):
        table.add_row(str(i), escape(b.title), escape(b.author), escape(b.category))
    console.print(table)
