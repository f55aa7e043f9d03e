"""The personal "My Books" list."""

from __future__ import annotations

import json

import structlog

from .models import BookResult

log = structlog.get_logger()

SLOT_NAME = "myBooks"


class Shelf:
    """Saved books keyed by ISBN, in the order they were added.

    Saved entries are independent copies of search results; the slot
    format is a JSON array of result objects, the same shape the search
    endpoint returns.
    """

    def __init__(self, books: list[BookResult] | None = None) -> None:
        self._books: dict[str, BookResult] = {}
        for book in books or []:
            self._books.setdefault(book.isbn, book)

    def __contains__(self, isbn: str) -> bool:
        return isbn in self._books

    def __len__(self) -> int:
        return len(self._books)

    def books(self) -> list[BookResult]:
        return list(self._books.values())

    def add(self, book: BookResult) -> bool:
        """Save ``book``. Returns False, leaving the shelf as is, on a duplicate ISBN."""
        if book.isbn in self._books:
            log.warning("shelf_duplicate", isbn=book.isbn)
            return False
        self._books[book.isbn] = book
        return True

    def remove(self, isbn: str) -> bool:
        """Drop ``isbn``. Unknown ISBNs are a no-op returning False."""
        return self._books.pop(isbn, None) is not None

    def clear(self) -> None:
        self._books.clear()

    def to_json(self) -> str:
        return json.dumps([b.to_dict() for b in self._books.values()], ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str | None) -> Shelf:
        """Load a shelf from its slot value. Missing or corrupt slots load empty."""
        if not raw:
            return cls()
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            log.warning("shelf_slot_corrupt", error=str(e))
            return cls()
        books = []
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, dict):
                continue
            try:
                books.append(BookResult.from_dict(item))
            except ValueError:
                log.debug("shelf_entry_skipped", entry=item)
        return cls(books)
