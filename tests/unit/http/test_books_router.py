"""HTTP tests for the /books routes."""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi import status
from pymongo.errors import ServerSelectionTimeoutError

from src.bookstore.core.services import BookService
from src.bookstore.entities.book import BookRepository


class TestWelcome:
    def test_root_returns_welcome_text(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.text == "Welcome to the Bookstore"
        assert response.headers["content-type"].startswith("text/plain")


class TestCreateBook:
    def test_create_returns_201_with_book(self, client, dune):
        response = client.post("/books", json=dune)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert ObjectId.is_valid(body["id"])
        assert body["title"] == "Dune"
        assert body["author"] == "Herbert"
        assert body["publishYear"] == 1965
        assert "createdAt" in body
        assert "updatedAt" in body

    @pytest.mark.parametrize("missing", ["title", "author", "publishYear"])
    def test_missing_field_returns_400_and_inserts_nothing(
        self, client, dune, books_collection, missing
    ):
        del dune[missing]

        response = client.post("/books", json=dune)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Send all required fields" in response.json()["message"]
        assert books_collection.count_documents({}) == 0

    def test_malformed_year_returns_400(self, client, dune, books_collection):
        dune["publishYear"] = "nineteen sixty-five"

        response = client.post("/books", json=dune)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "publishYear" in response.json()["message"]
        assert books_collection.count_documents({}) == 0

    def test_boolean_year_returns_400(self, client, dune, books_collection):
        dune["publishYear"] = True

        response = client.post("/books", json=dune)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "publishYear" in response.json()["message"]
        assert books_collection.count_documents({}) == 0

    def test_ids_are_unique(self, client, dune):
        ids = {client.post("/books", json=dune).json()["id"] for _ in range(3)}

        assert len(ids) == 3

    def test_get_after_create_returns_same_fields(self, client, dune):
        created = client.post("/books", json=dune).json()

        fetched = client.get(f"/books/{created['id']}").json()

        assert {k: fetched[k] for k in dune} == dune


class TestListBooks:
    def test_list_returns_count_and_data(self, client, dune):
        client.post("/books", json=dune)
        client.post(
            "/books", json={"title": "Emma", "author": "Austen", "publishYear": 1815}
        )

        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["count"] == 2
        assert sorted(book["title"] for book in body["data"]) == ["Dune", "Emma"]

    def test_empty_list(self, client):
        assert client.get("/books").json() == {"count": 0, "data": []}


class TestGetBook:
    def test_unknown_id_returns_404(self, client):
        response = client.get(f"/books/{ObjectId()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Book not found"

    def test_malformed_id_returns_404(self, client):
        response = client.get("/books/doesnotexist")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateBook:
    def test_update_then_get_reflects_changes(self, client, dune):
        created = client.post("/books", json=dune).json()
        changes = {"title": "Dune Messiah", "author": "Frank Herbert", "publishYear": 1969}

        response = client.put(f"/books/{created['id']}", json=changes)

        assert response.status_code == status.HTTP_200_OK
        fetched = client.get(f"/books/{created['id']}").json()
        assert {k: fetched[k] for k in changes} == changes
        assert fetched["id"] == created["id"]
        assert fetched["createdAt"] == created["createdAt"]

    def test_update_absent_book_returns_404(self, client, dune):
        response = client.put("/books/doesnotexist", json=dune)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_missing_field_returns_400(self, client, dune):
        created = client.post("/books", json=dune).json()

        response = client.put(f"/books/{created['id']}", json={"title": "Only title"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteBook:
    def test_delete_then_get_returns_404(self, client, dune):
        created = client.post("/books", json=dune).json()

        response = client.delete(f"/books/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Book deleted successfully"}
        assert client.get(f"/books/{created['id']}").status_code == 404

    def test_delete_absent_book_returns_404(self, client):
        assert client.delete(f"/books/{ObjectId()}").status_code == 404


class TestStoreFailures:
    def test_store_error_returns_500_with_driver_message(self, client, app):
        collection = MagicMock()
        collection.find.side_effect = ServerSelectionTimeoutError("connection refused")
        app.state.app_dependencies.book_service = BookService(BookRepository(collection))

        response = client.get("/books")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "connection refused" in response.json()["message"]


class TestCrossCutting:
    def test_cors_allows_any_origin(self, client):
        response = client.options(
            "/books",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"

    def test_unhandled_error_is_readable_cross_origin(self, client, app):
        service = MagicMock()
        service.list_books.side_effect = RuntimeError("boom")
        app.state.app_dependencies.book_service = service

        response = client.get("/books", headers={"Origin": "http://example.com"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Internal Server Error"
        assert response.headers["access-control-allow-origin"] == "*"

    def test_request_id_is_echoed(self, client):
        response = client.get("/books", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_error_body_carries_request_id(self, client):
        response = client.get("/books/doesnotexist", headers={"X-Request-ID": "req-404"})

        assert response.json()["request_id"] == "req-404"

    def test_security_headers(self, client):
        response = client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
