"""Turn the model's reply into candidate books."""

from __future__ import annotations

import json

import structlog

from .errors import NotFoundError, ParseError
from .models import NO_MATCH, Candidate

log = structlog.get_logger()


def _text(value: object) -> str | None:
    # Only scalars count; objects, lists and booleans are treated as absent.
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value)
    return text if text.strip() else None


def _candidate(item: object) -> Candidate:
    # Non-object entries still occupy a slot so the top-3 window is unchanged.
    if not isinstance(item, dict):
        return Candidate(identifier=None)
    return Candidate(
        identifier=_text(item.get("ISBN")),
        title=_text(item.get("Title")),
        author=_text(item.get("Author")),
        summary=_text(item.get("Summary")),
    )


def parse_reply(raw: str) -> list[Candidate]:
    """Decode ``raw`` as a JSON array of ``{ISBN, Title, Author, Summary}``.

    Raises ParseError if the text is not JSON, and NotFoundError if it
    is not a non-empty array or the model signalled no match.
    """
    try:
        books = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        log.warning("reply_parse_failed", error=str(e), reply=str(raw)[:200])
        raise ParseError("Failed to parse OpenAI response") from e

    if not isinstance(books, list) or not books:
        raise NotFoundError("No books found for the given query")

    candidates = [_candidate(item) for item in books]
    if candidates[0].identifier == NO_MATCH:
        log.info("reply_no_match")
        raise NotFoundError("No books found for the given query")
    return candidates
