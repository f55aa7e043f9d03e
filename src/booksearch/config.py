"""Environment-driven settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import structlog

DEFAULT_OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_OPENLIBRARY_SEARCH_URL = "https://openlibrary.org/search.json"
DEFAULT_HTTP_TIMEOUT = 30.0

log = structlog.get_logger()


def _timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        log.warning("http_timeout_invalid", value=raw, default=DEFAULT_HTTP_TIMEOUT)
        return DEFAULT_HTTP_TIMEOUT
    return value


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_api_url: str = DEFAULT_OPENAI_API_URL
    openai_model: str = DEFAULT_OPENAI_MODEL
    openlibrary_search_url: str = DEFAULT_OPENLIBRARY_SEARCH_URL
    ol_contact_email: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    shelf_db: Path = Path(".cache") / "booksearch.db"

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the process environment.

        Called per request so that a key added to the environment after
        startup is picked up, and a missing key is only reported when a
        search actually needs it.
        """
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY", "").strip(),
            openai_api_url=os.environ.get("OPENAI_API_URL", DEFAULT_OPENAI_API_URL),
            openai_model=os.environ.get("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            openlibrary_search_url=os.environ.get(
                "OPENLIBRARY_SEARCH_URL", DEFAULT_OPENLIBRARY_SEARCH_URL
            ),
            ol_contact_email=os.environ.get("OL_CONTACT_EMAIL", ""),
            http_timeout=_timeout(os.environ.get("HTTP_TIMEOUT")),
            shelf_db=Path(os.environ.get("SHELF_DB", str(Path(".cache") / "booksearch.db"))),
        )


def configure_logging(level: str | None = None) -> None:
    """Set the structlog level from ``LOG_LEVEL`` (default INFO)."""
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(numeric))
