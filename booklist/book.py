from __future__ import annotations

import uuid


class Book:
    """Represents a single entry in the book list."""

    def __init__(self, title: str, author: str, category: str, image_url: str, book_id: str | None = None) -> None:
        self.title = title
        self.author = author
        self.category = category
        self.image_url = image_url
        # Session-scoped identity, never written to storage
        self.id = book_id or uuid.uuid4().hex

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} ({self.category})"

    def __repr__(self) -> str:
        return f"Book(title={self.title!r}, author={self.author!r}, category={self.category!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable

    def matches(self, title: str, author: str) -> bool:
        """Exact, case-sensitive match on the (title, author) pair."""
        return self.title == title and self.author == author

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "category": self.category,
            "imageUrl": self.image_url,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            title=data["title"],
            author=data["author"],
            category=data["category"],
            image_url=data["imageUrl"],
        )
