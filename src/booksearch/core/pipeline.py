"""The search pipeline: query → completion → parse → enrich."""

from __future__ import annotations

import httpx
import structlog

from ..config import Settings
from .completion import CompletionClient
from .enrich import enrich
from .errors import ConfigurationError, ValidationError
from .models import BookResult
from .openlibrary import OpenLibraryClient
from .parser import parse_reply

log = structlog.get_logger()


async def search_books(
    query: str | None,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[BookResult]:
    """Run one search end to end.

    Every stage is attempted once. Failures surface as ``SearchError``
    subclasses, except catalog lookups, which only drop their own book.
    """
    if not query or not query.strip():
        raise ValidationError("q is required")
    if not settings.openai_api_key:
        log.error("openai_key_missing")
        raise ConfigurationError("OpenAI API key is not configured")

    async with httpx.AsyncClient(transport=transport) as client:
        completion = CompletionClient(
            client,
            api_key=settings.openai_api_key,
            api_url=settings.openai_api_url,
            model=settings.openai_model,
            timeout=settings.http_timeout,
        )
        raw = await completion.complete(query)
        candidates = parse_reply(raw)

        catalog = OpenLibraryClient(
            client,
            search_url=settings.openlibrary_search_url,
            contact_email=settings.ol_contact_email,
            timeout=settings.http_timeout,
        )
        results = await enrich(catalog, candidates)

    log.info("search_complete", query=query, candidates=len(candidates), results=len(results))
    return results
