from __future__ import annotations

import json
import logging
import sqlite3
from typing import List

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from booklist.book import Book
from booklist.database import LocalStore

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The durable store could not be read or written."""


class CorruptStorageError(StorageError):
    """The stored slot exists but does not hold a valid book list."""


class StoredBook(BaseModel):
    """Shape of one record inside the persisted blob."""

    model_config = ConfigDict(strict=True)

    title: str
    author: str
    category: str
    imageUrl: str


_stored_books = TypeAdapter(List[StoredBook])


class BookStorage:
    """Reads and writes the whole book list as one JSON blob in a named slot."""

    def __init__(self, store: LocalStore, key: str) -> None:
        self.store = store
        self.key = key

    def load(self) -> List[Book]:
        """Return the saved list, or an empty list when nothing was ever saved."""
        try:
            raw = self.store.get_item(self.key)
        except sqlite3.Error as e:
            logger.error(f"Could not read slot {self.key!r}: {e}")
            raise StorageError(f"Could not read book list: {e}") from e

        if raw is None:
            return []

        try:
            records = _stored_books.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Slot {self.key!r} holds an unreadable book list")
            raise CorruptStorageError(
                f"Stored book list under {self.key!r} is corrupt: {e.error_count()} problem(s) found."
            ) from e

        return [Book.from_dict(record.model_dump()) for record in records]

    def save(self, books: List[Book]) -> None:
        """Overwrite the slot with the full list."""
        payload = json.dumps([book.to_dict() for book in books], ensure_ascii=False)
        try:
            self.store.set_item(self.key, payload)
        except sqlite3.Error as e:
            logger.error(f"Could not write slot {self.key!r}: {e}")
            raise StorageError(f"Could not save book list: {e}") from e

    def clear(self) -> None:
        try:
            self.store.remove_item(self.key)
        except sqlite3.Error as e:
            raise StorageError(f"Could not clear book list: {e}") from e
