"""Look up books in the Open Library search index."""

from __future__ import annotations

import httpx
import structlog

from ..config import DEFAULT_HTTP_TIMEOUT, DEFAULT_OPENLIBRARY_SEARCH_URL
from .models import CatalogRecord

log = structlog.get_logger()

COVER_URL_TEMPLATE = "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"


def cover_url(cover_id: int | None) -> str | None:
    if cover_id is None:
        return None
    return COVER_URL_TEMPLATE.format(cover_id=cover_id)


def _user_agent(contact: str) -> str:
    # Open Library asks identified clients to include a contact address.
    return f"BookSearch/0.1.0 ({contact})" if contact else "BookSearch/0.1.0"


class OpenLibraryClient:
    """Best-match lookups against ``search.json``.

    ``lookup`` raises ``httpx.HTTPError`` on transport errors and
    non-success statuses, and ``ValueError`` when the body is not JSON or
    not shaped like a search response; callers decide whether that is fatal.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        search_url: str = DEFAULT_OPENLIBRARY_SEARCH_URL,
        contact_email: str = "",
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self.client = client
        self.search_url = search_url
        self.user_agent = _user_agent(contact_email)
        self.timeout = timeout

    async def lookup(self, identifier: str) -> CatalogRecord | None:
        """Return the first matching doc for ``identifier``, or None on no match."""
        resp = await self.client.get(
            self.search_url,
            params={"q": identifier},
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            timeout=self.timeout,
            follow_redirects=True,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("Open Library response is not an object")
        docs = data.get("docs") or []
        if not isinstance(docs, list):
            raise ValueError("Open Library docs is not a list")
        if not docs:
            log.debug("openlibrary_no_match", identifier=identifier)
            return None

        doc = docs[0]
        if not isinstance(doc, dict):
            raise ValueError("Open Library doc is not an object")
        title = doc.get("title")
        authors = doc.get("author_name")
        author = authors[0] if isinstance(authors, list) and authors else None
        cover_id = doc.get("cover_i")
        record = CatalogRecord(
            title=title if isinstance(title, str) and title else None,
            author=author if isinstance(author, str) and author else None,
            cover_id=cover_id if isinstance(cover_id, int) and not isinstance(cover_id, bool) else None,
        )
        log.debug(
            "openlibrary_hit",
            identifier=identifier,
            title=record.title,
            has_cover=record.cover_id is not None,
        )
        return record
