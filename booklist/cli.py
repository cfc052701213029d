import logging
import sqlite3
import sys
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from booklist.config import settings
from booklist.database import LocalStore
from booklist.library import ALL_CATEGORIES, BookList, SortDirection, VisibleBooks
from booklist.storage import BookStorage, StorageError
from booklist.ui_helpers import print_books, print_books_table, set_output_mode

console = Console()

app = typer.Typer(help="Manage a personal book list.")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def open_book_list(persist_sort: Optional[bool] = None) -> BookList:
    """Build a BookList over the configured store, exiting with code 1 if it cannot be loaded."""
    try:
        storage = BookStorage(LocalStore(settings.db_file), settings.storage_key)
        return BookList(storage, image_url=settings.image_url, persist_sort=persist_sort)
    except (StorageError, sqlite3.Error) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)


def category_choices(books: BookList) -> List[str]:
    """Configured labels followed by any other label already used in the list."""
    choices = list(settings.categories)
    for category in books.categories():
        if category not in choices:
            choices.append(category)
    return choices


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global options for the CLI (e.g. output mode)."""
    _configure_logging()
    if output:
        set_output_mode(output)


@app.command("list")
def cli_list(
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Only show this category"),
    sort: Optional[SortDirection] = typer.Option(None, "--sort", "-s", help="Order by title: asc | desc"),
):
    """List books, optionally filtered and sorted for this listing only."""
    books = open_book_list(persist_sort=False)
    if sort is not None:
        books.sort_books(sort)
    books.set_filter(category)
    print_books(books.visible_books())


@app.command("add")
def cli_add(
    title: str,
    author: str,
    category: str = typer.Option(settings.categories[0], "--category", "-c", help="Book category"),
):
    """Add a book to the list."""
    books = open_book_list()
    try:
        book = books.add_book(title, author, category)
    except StorageError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    if book is None:
        print("Title and author must not be empty.")
        raise typer.Exit(code=1)
    print(f"Added: {book.title} by {book.author} [{book.category}]")


@app.command("remove")
def cli_remove(title: str, author: str):
    """Remove every book with exactly this title and author."""
    books = open_book_list()
    try:
        removed = books.delete_book(title, author)
    except StorageError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    if removed:
        print(f"Removed {removed} book(s): {title} by {author}")
    else:
        print(f"No book titled '{title}' by {author} found.")


@app.command("sort")
def cli_sort(direction: SortDirection):
    """Sort the stored list by title and keep that order."""
    books = open_book_list(persist_sort=True)
    try:
        books.sort_books(direction)
    except StorageError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print(f"Sorted {len(books)} book(s) {'A to Z' if direction is SortDirection.ASC else 'Z to A'}.")


@app.command("categories")
def cli_categories():
    """Show the available category labels, including ones only used by stored books."""
    for category in category_choices(open_book_list()):
        print(category)


@app.command("clear")
def cli_clear(yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation")):
    """Delete every stored book."""
    if not yes and not Confirm.ask("Delete all books?", default=False):
        print("Aborted.")
        return
    try:
        BookStorage(LocalStore(settings.db_file), settings.storage_key).clear()
    except (StorageError, sqlite3.Error) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print("Book list cleared.")


# --- Interactive session ---
def run_menu() -> None:
    """Interactive menu. Sorting and filtering last until the session ends."""
    books = open_book_list()

    def render(view: VisibleBooks) -> None:
        label = "all categories" if view.category == ALL_CATEGORIES else view.category
        print_books_table(view, title=f"📚 Books ({escape(label)})", console=console)

    books.subscribe(render)

    def render_menu() -> None:
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column(style="bold cyan", no_wrap=True)
        table.add_column()
        for key, label in [
            ("1", "List books"),
            ("2", "Add a book"),
            ("3", "Delete a book"),
            ("4", "Sort A to Z"),
            ("5", "Sort Z to A"),
            ("6", "Filter by category"),
            ("0", "Quit"),
        ]:
            table.add_row(key, label)
        console.print(Panel(table, title=settings.app_name, border_style="cyan", box=box.HEAVY))

    def add() -> None:
        title = Prompt.ask("Title", default="")
        author = Prompt.ask("Author", default="")
        category = Prompt.ask("Category", choices=category_choices(books), default=settings.categories[0])
        if books.add_book(title, author, category) is None:
            console.print("[yellow]Title and author must not be empty.[/]")

    def delete() -> None:
        visible = books.visible_books().to_list()
        if not visible:
            console.print("[yellow]Nothing to delete.[/]")
            return
        print_books_table(visible, console=console)
        choices = [str(i) for i in range(1, len(visible) + 1)]
        index = int(Prompt.ask("Number of the book to delete", choices=choices))
        books.delete_book_by_id(visible[index - 1].id)

    def choose_filter() -> None:
        choices = [ALL_CATEGORIES] + category_choices(books)
        books.set_filter(Prompt.ask("Category", choices=choices, default=books.current_filter))

    while True:
        render_menu()
        choice = Prompt.ask("Choose an option", choices=["1", "2", "3", "4", "5", "6", "0"], default="1")
        try:
            if choice == "1":
                render(books.visible_books())
            elif choice == "2":
                add()
            elif choice == "3":
                delete()
            elif choice == "4":
                books.sort_books(SortDirection.ASC)
            elif choice == "5":
                books.sort_books(SortDirection.DESC)
            elif choice == "6":
                choose_filter()
            elif choice == "0":
                console.print("[green]Goodbye![/]")
                break
        except StorageError as e:
            console.print(f"[red]Could not save: {e}[/]")
        console.print()


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        _configure_logging()
        try:
            run_menu()
        except typer.Exit as e:
            sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
