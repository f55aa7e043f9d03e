"""Merge model candidates with Open Library metadata."""

from __future__ import annotations

import asyncio
from typing import Protocol

import httpx
import structlog

from .errors import NotFoundError
from .models import NO_MATCH, BookResult, Candidate, CatalogRecord
from .openlibrary import cover_url

log = structlog.get_logger()

MAX_CANDIDATES = 3


class CatalogLookup(Protocol):
    async def lookup(self, identifier: str) -> CatalogRecord | None: ...


def merge(candidate: Candidate, record: CatalogRecord | None) -> BookResult:
    """Candidate fields win; the catalog fills gaps and supplies the cover."""
    record = record or CatalogRecord()
    return BookResult(
        isbn=candidate.identifier,
        title=candidate.title or record.title,
        author=candidate.author or record.author,
        image_url=cover_url(record.cover_id),
        summary=candidate.summary,
    )


async def _enrich_one(catalog: CatalogLookup, candidate: Candidate) -> BookResult | None:
    try:
        record = await catalog.lookup(candidate.identifier)
    except (httpx.HTTPError, ValueError) as e:
        log.debug("enrich_lookup_failed", isbn=candidate.identifier, error=str(e))
        return None
    return merge(candidate, record)


async def enrich(catalog: CatalogLookup, candidates: list[Candidate]) -> list[BookResult]:
    """Enrich the first three usable candidates, keeping the model's order.

    Lookups run concurrently. A candidate whose lookup fails is dropped;
    NotFoundError is raised only when nothing is left.
    """
    usable = [
        c
        for c in candidates[:MAX_CANDIDATES]
        if c.identifier and c.identifier != NO_MATCH
    ]
    merged = await asyncio.gather(*(_enrich_one(catalog, c) for c in usable))
    results = [r for r in merged if r is not None]

    log.info(
        "enrich_complete",
        candidates=len(usable),
        results=len(results),
        dropped=len(usable) - len(results),
    )
    if not results:
        raise NotFoundError("No valid book data found")
    return results
