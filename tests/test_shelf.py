import json

import pytest

from booksearch.core.models import BookResult
from booksearch.core.shelf import SLOT_NAME, Shelf
from booksearch.core.store import SlotStore
from booksearch.web.app import app

DUNE = BookResult(isbn="9780441013593", title="Dune", author="Frank Herbert")
HOBBIT = BookResult(
    isbn="9780547928227",
    title="The Hobbit",
    image_url="https://covers.openlibrary.org/b/id/1-M.jpg",
)


def test_add_duplicate_isbn_is_a_no_op():
    shelf = Shelf()
    assert shelf.add(DUNE) is True
    assert shelf.add(BookResult(isbn=DUNE.isbn, title="Another Dune")) is False
    assert shelf.books() == [DUNE]


def test_remove_unknown_isbn_is_a_no_op():
    shelf = Shelf([DUNE])
    assert shelf.remove("0000") is False
    assert shelf.books() == [DUNE]
    assert shelf.remove(DUNE.isbn) is True
    assert len(shelf) == 0


def test_keeps_insertion_order():
    shelf = Shelf()
    shelf.add(HOBBIT)
    shelf.add(DUNE)
    assert [b.isbn for b in shelf.books()] == [HOBBIT.isbn, DUNE.isbn]
    assert DUNE.isbn in shelf


def test_slot_format_matches_search_results():
    shelf = Shelf([HOBBIT])
    assert json.loads(shelf.to_json()) == [
        {
            "isbn": "9780547928227",
            "title": "The Hobbit",
            "author": None,
            "imageUrl": "https://covers.openlibrary.org/b/id/1-M.jpg",
            "summary": None,
        }
    ]
    assert Shelf.from_json(shelf.to_json()).books() == [HOBBIT]


@pytest.mark.parametrize("raw", [None, "", "{broken", '{"isbn": "1"}', '[{"title": "no isbn"}, 3]'])
def test_unusable_slot_loads_empty(raw):
    assert Shelf.from_json(raw).books() == []


def test_slot_store_round_trip(tmp_path):
    store = SlotStore(tmp_path / "nested" / "shelf.db")
    assert store.load_shelf().books() == []
    store.save_shelf(Shelf([DUNE, HOBBIT]))
    store.close()

    reopened = SlotStore(tmp_path / "nested" / "shelf.db")
    assert reopened.load_shelf().books() == [DUNE, HOBBIT]
    assert json.loads(reopened.get(SLOT_NAME))[0]["isbn"] == DUNE.isbn
    reopened.close()


@pytest.fixture
def shelf_client(tmp_path):
    from fastapi.testclient import TestClient

    store = SlotStore(tmp_path / "shelf.db")
    app.state.slot_store = store
    yield TestClient(app)
    app.state.slot_store = None
    store.close()


def test_shelf_routes(shelf_client):
    assert shelf_client.get("/api/shelf").json() == []

    added = shelf_client.post("/api/shelf", json=DUNE.to_dict())
    assert added.status_code == 201
    assert [b["isbn"] for b in added.json()] == [DUNE.isbn]

    duplicate = shelf_client.post("/api/shelf", json=DUNE.to_dict())
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Book already in your list."}

    shelf_client.post("/api/shelf", json=HOBBIT.to_dict())
    assert shelf_client.delete("/api/shelf/0000").json() == [DUNE.to_dict(), HOBBIT.to_dict()]
    assert shelf_client.delete(f"/api/shelf/{DUNE.isbn}").json() == [HOBBIT.to_dict()]
    assert shelf_client.delete("/api/shelf").json() == []
    assert shelf_client.get("/api/shelf").json() == []


def test_shelf_rejects_book_without_isbn(shelf_client):
    response = shelf_client.post("/api/shelf", json={"title": "Untitled"})
    assert response.status_code == 400
    assert response.json() == {"error": "isbn is required"}
