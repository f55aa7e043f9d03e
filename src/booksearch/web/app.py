"""FastAPI web application for BookSearch."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

import structlog
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ..config import Settings, configure_logging
from ..core.errors import SearchError
from ..core.models import BookResult
from ..core.pipeline import search_books
from ..core.store import SlotStore

load_dotenv()
configure_logging()

log = structlog.get_logger()

STATIC_DIR = Path(__file__).parent / "static"
VERSION = "0.1.0"

app = FastAPI(title="BookSearch", docs_url=None, redoc_url=None)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError):
    log.info("search_failed", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def _slot_store(request: Request) -> SlotStore:
    store = getattr(request.app.state, "slot_store", None)
    if store is None:
        store = SlotStore(Settings.from_env().shelf_db)
        request.app.state.slot_store = store
    return store


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
        "environment": os.environ.get("ENV", "dev"),
    }


@app.get("/", response_class=HTMLResponse)
async def index():
    return (STATIC_DIR / "index.html").read_text()


@app.get("/api/search")
async def search(request: Request, q: str | None = None):
    transport = getattr(request.app.state, "http_transport", None)
    books = await search_books(q, Settings.from_env(), transport=transport)
    return [b.to_dict() for b in books]


@app.get("/api/shelf")
async def list_shelf(request: Request):
    shelf = _slot_store(request).load_shelf()
    return [b.to_dict() for b in shelf.books()]


@app.post("/api/shelf", status_code=201)
async def add_to_shelf(request: Request):
    try:
        body = await request.json()
        book = BookResult.from_dict(body if isinstance(body, dict) else {})
    except ValueError:
        return JSONResponse({"error": "isbn is required"}, status_code=400)

    store = _slot_store(request)
    shelf = store.load_shelf()
    if not shelf.add(book):
        return JSONResponse({"error": "Book already in your list."}, status_code=409)
    store.save_shelf(shelf)
    log.info("shelf_add", isbn=book.isbn, size=len(shelf))
    return [b.to_dict() for b in shelf.books()]


@app.delete("/api/shelf/{isbn}")
async def remove_from_shelf(request: Request, isbn: str):
    store = _slot_store(request)
    shelf = store.load_shelf()
    if shelf.remove(isbn):
        store.save_shelf(shelf)
        log.info("shelf_remove", isbn=isbn, size=len(shelf))
    return [b.to_dict() for b in shelf.books()]


@app.delete("/api/shelf")
async def clear_shelf(request: Request):
    store = _slot_store(request)
    shelf = store.load_shelf()
    shelf.clear()
    store.save_shelf(shelf)
    log.info("shelf_clear")
    return []


def main():
    port = int(os.environ.get("PORT", "8000"))
    is_dev = os.environ.get("ENV", "dev") == "dev"
    uvicorn.run(
        "booksearch.web.app:app",
        host="0.0.0.0",
        port=port,
        reload=is_dev,
    )
