"""Ask a chat-completions model for books matching a description."""

from __future__ import annotations

import httpx
import structlog

from ..config import DEFAULT_HTTP_TIMEOUT, DEFAULT_OPENAI_API_URL, DEFAULT_OPENAI_MODEL
from .errors import UpstreamError

log = structlog.get_logger()

SYSTEM_PROMPT = """\
You are a helpful assistant that helps people find books. You will be given a \
description of a book or books, and you will respond with the ISBN of the most \
relevant book. If no books match, respond with 'none'.
Return in the following format:
[
    {
        "ISBN": <ISBN>,
        "Title": <Book Title>,
        "Author": <Author>,
        "Summary": <Short Summary>
    }
]
"""

USER_PROMPT = (
    "Find the ISBN of a book that matches this description: {query}. "
    "Return the ISBN, Book Title, Author and a short summary of the three most "
    'relevant ones. If no books match, return "none".'
)


def build_messages(query: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT.format(query=query)},
    ]


class CompletionClient:
    """Sends the fixed book-finding prompt and returns the raw reply text."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        api_url: str = DEFAULT_OPENAI_API_URL,
        model: str = DEFAULT_OPENAI_MODEL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self.client = client
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout

    async def complete(self, query: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"model": self.model, "messages": build_messages(query)}
        try:
            resp = await self.client.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning("completion_failed", model=self.model, error=str(e))
            raise UpstreamError("Failed to fetch data from OpenAI") from e

        try:
            message = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            message = None
        if not message:
            log.warning("completion_empty", model=self.model)
            raise UpstreamError("No message returned from OpenAI")

        log.debug("completion_received", model=self.model, chars=len(message))
        return message
