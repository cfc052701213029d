from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterator, List, Optional

from booklist.book import Book
from booklist.config import settings
from booklist.storage import BookStorage, StorageError

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class VisibleBooks:
    """Filtered view over a BookList.

    Nothing is copied up front: each iteration reads the list's current books
    and current filter, so the same object can be iterated again after a
    mutation and reflects it.
    """

    def __init__(self, book_list: "BookList") -> None:
        self._book_list = book_list

    @property
    def category(self) -> str:
        return self._book_list.current_filter

    def __iter__(self) -> Iterator[Book]:
        category = self._book_list.current_filter
        for book in list(self._book_list.books):
            if category == ALL_CATEGORIES or book.category == category:
                yield book

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def is_empty(self) -> bool:
        """True when nothing matches the current filter."""
        return next(iter(self), None) is None

    def to_list(self) -> List[Book]:
        return list(self)


Listener = Callable[[VisibleBooks], None]


class BookList:
    """Owns the book collection and the current filter selection.

    Every mutation is written through to storage before it counts as done; if
    the write fails the in-memory list is put back the way it was and the
    StorageError is re-raised.
    """

    def __init__(
        self,
        storage: BookStorage,
        image_url: Optional[str] = None,
        persist_sort: Optional[bool] = None,
    ) -> None:
        self.storage = storage
        self.image_url = image_url if image_url is not None else settings.image_url
        self.persist_sort = settings.persist_sort if persist_sort is None else persist_sort
        self.current_filter = ALL_CATEGORIES
        self._listeners: List[Listener] = []
        self._books: List[Book] = storage.load()
        logger.info(f"Loaded {len(self._books)} book(s) from storage")

    # ------------------------- Queries ------------------------- #
    @property
    def books(self) -> List[Book]:
        return list(self._books)

    def __len__(self) -> int:
        return len(self._books)

    def visible_books(self) -> VisibleBooks:
        return VisibleBooks(self)

    def categories(self) -> List[str]:
        """Distinct categories in the list, in first-seen order."""
        seen: List[str] = []
        for book in self._books:
            if book.category not in seen:
                seen.append(book.category)
        return seen

    # ------------------------- Mutations ------------------------- #
    def add_book(self, title: str, author: str, category: str) -> Optional[Book]:
        """Append a new book. Returns None, and changes nothing, if title or author is blank."""
        title = title.strip()
        author = author.strip()
        if not title or not author:
            logger.debug("Ignoring add with blank title or author")
            return None

        book = Book(title=title, author=author, category=category, image_url=self.image_url)
        self._commit(lambda books: books + [book])
        logger.info(f"Added {book}")
        self._notify()
        return book

    def delete_book(self, title: str, author: str) -> int:
        """Remove every book whose title and author match exactly.

        Returns the number of books removed; nothing is saved when it is 0.
        """
        survivors = [book for book in self._books if not book.matches(title, author)]
        removed = len(self._books) - len(survivors)
        if removed == 0:
            return 0

        self._commit(lambda books: survivors)
        logger.info(f"Deleted {removed} book(s) matching {title!r} by {author!r}")
        self._notify()
        return removed

    def delete_book_by_id(self, book_id: str) -> bool:
        survivors = [book for book in self._books if book.id != book_id]
        if len(survivors) == len(self._books):
            return False

        self._commit(lambda books: survivors)
        logger.info(f"Deleted book {book_id}")
        self._notify()
        return True

    def sort_books(self, direction: SortDirection | str) -> None:
        """Stable sort by upper-cased title. Saved only when persist_sort is on."""
        direction = SortDirection(direction)
        reverse = direction is SortDirection.DESC

        def reorder(books: List[Book]) -> List[Book]:
            return sorted(books, key=lambda book: book.title.upper(), reverse=reverse)

        if self.persist_sort:
            self._commit(reorder)
        else:
            self._books[:] = reorder(self._books)
        logger.info(f"Sorted {len(self._books)} book(s) {direction.value}")
        self._notify()

    def set_filter(self, category: str) -> None:
        self.current_filter = category
        self._notify()

    # ------------------------- Change notification ------------------------- #
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback that receives the visible books after every change.

        Returns a function that removes the callback again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        view = self.visible_books()
        for listener in list(self._listeners):
            listener(view)

    # ------------------------- Persistence ------------------------- #
    def _commit(self, change: Callable[[List[Book]], List[Book]]) -> None:
        previous = list(self._books)
        self._books[:] = change(previous)
        try:
            self.storage.save(self._books)
        except StorageError:
            self._books[:] = previous
            raise
