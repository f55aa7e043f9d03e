import json

import httpx
import pytest

from booksearch.config import Settings
from booksearch.web.app import app

WIZARD_REPLY = [
    {
        "ISBN": "9780747532699",
        "Title": "Harry Potter and the Philosopher's Stone",
        "Author": "J.K. Rowling",
        "Summary": "A boy discovers he is a wizard.",
    }
]


def completion_body(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeServices:
    """Routes outbound requests to canned OpenAI and Open Library replies."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.completion = httpx.Response(200, json=completion_body(json.dumps(WIZARD_REPLY)))
        self.docs: dict[str, list[dict]] = {}
        self.failing: dict[str, int] = {}
        self.bodies: dict[str, httpx.Response] = {}

    def reply_with(self, books) -> None:
        content = books if isinstance(books, str) else json.dumps(books)
        self.completion = httpx.Response(200, json=completion_body(content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.openai.com":
            return self.completion
        identifier = request.url.params.get("q", "")
        if identifier in self.failing:
            status = self.failing[identifier]
            if status == 0:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(status, json={"error": "boom"})
        if identifier in self.bodies:
            return self.bodies[identifier]
        return httpx.Response(200, json={"docs": self.docs.get(identifier, [])})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def lookups(self) -> list[str]:
        return [r.url.params["q"] for r in self.requests if r.url.host == "openlibrary.org"]


@pytest.fixture
def services() -> FakeServices:
    return FakeServices()


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test")


@pytest.fixture
def client(services, monkeypatch):
    from fastapi.testclient import TestClient

    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    for name in ("OPENAI_API_URL", "OPENLIBRARY_SEARCH_URL"):
        monkeypatch.delenv(name, raising=False)
    app.state.http_transport = services.transport
    yield TestClient(app)
    app.state.http_transport = None
