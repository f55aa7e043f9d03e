"""Data models for search candidates and results."""

from __future__ import annotations

from dataclasses import asdict, dataclass

NO_MATCH = "none"


@dataclass(frozen=True)
class Candidate:
    """A book proposed by the language model, before enrichment."""

    identifier: str | None
    title: str | None = None
    author: str | None = None
    summary: str | None = None


@dataclass(frozen=True)
class CatalogRecord:
    title: str | None = None
    author: str | None = None
    cover_id: int | None = None


@dataclass(frozen=True)
class BookResult:
    isbn: str
    title: str | None = None
    author: str | None = None
    image_url: str | None = None
    summary: str | None = None

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys the front-end expects."""
        data = asdict(self)
        data["imageUrl"] = data.pop("image_url")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> BookResult:
        isbn = data.get("isbn")
        if not isbn:
            raise ValueError("isbn is required")
        return cls(
            isbn=str(isbn),
            title=data.get("title"),
            author=data.get("author"),
            image_url=data.get("imageUrl", data.get("image_url")),
            summary=data.get("summary"),
        )
