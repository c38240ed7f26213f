"""Unit tests for BookService."""

import pytest
from bson import ObjectId

from src.bookstore.core.errors import NotFoundError, ValidationError
from src.bookstore.entities.book import BookPayload


def _payload(**overrides) -> BookPayload:
    values = {"title": "Dune", "author": "Herbert", "publish_year": 1965}
    values.update(overrides)
    return BookPayload(**values)


class TestCreateBook:
    def test_create_returns_stored_book(self, book_service):
        book = book_service.create_book(_payload())

        assert book.title == "Dune"
        assert book.author == "Herbert"
        assert book.publish_year == 1965
        assert book_service.get_book(book.id) == book

    @pytest.mark.parametrize("missing", ["title", "author", "publish_year"])
    def test_missing_field_is_rejected_without_insert(
        self, book_service, books_collection, missing
    ):
        with pytest.raises(ValidationError) as exc_info:
            book_service.create_book(_payload(**{missing: None}))

        assert exc_info.value.status_code == 400
        assert "Send all required fields" in exc_info.value.message
        assert books_collection.count_documents({}) == 0

    def test_server_trusts_negative_year(self, book_service):
        book = book_service.create_book(_payload(publish_year=-44))

        assert book.publish_year == -44


class TestListBooks:
    def test_list_returns_count_and_data(self, book_service):
        book_service.create_book(_payload())
        book_service.create_book(_payload(title="Children of Dune", publish_year=1976))

        result = book_service.list_books()

        assert result.count == 2
        assert len(result.data) == 2

    def test_empty_catalog(self, book_service):
        result = book_service.list_books()

        assert result.count == 0
        assert result.data == []


class TestGetBook:
    def test_unknown_id_raises_not_found(self, book_service):
        with pytest.raises(NotFoundError, match="Book not found"):
            book_service.get_book(str(ObjectId()))

    def test_malformed_id_raises_not_found(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.get_book("doesnotexist")


class TestUpdateBook:
    def test_update_then_get_reflects_new_values(self, book_service):
        created = book_service.create_book(_payload())

        book_service.update_book(
            created.id, _payload(title="Dune Messiah", publish_year=1969)
        )
        fetched = book_service.get_book(created.id)

        assert fetched.title == "Dune Messiah"
        assert fetched.publish_year == 1969
        assert fetched.id == created.id
        assert fetched.created_at == created.created_at

    def test_update_requires_all_fields(self, book_service):
        created = book_service.create_book(_payload())

        with pytest.raises(ValidationError):
            book_service.update_book(created.id, _payload(author="  "))

        assert book_service.get_book(created.id).author == "Herbert"

    @pytest.mark.parametrize("book_id", ["doesnotexist", str(ObjectId())])
    def test_update_absent_book_raises_not_found(self, book_service, book_id):
        with pytest.raises(NotFoundError):
            book_service.update_book(book_id, _payload())


class TestDeleteBook:
    def test_delete_then_get_raises_not_found(self, book_service):
        created = book_service.create_book(_payload())

        book_service.delete_book(created.id)

        with pytest.raises(NotFoundError):
            book_service.get_book(created.id)

    @pytest.mark.parametrize("book_id", ["doesnotexist", str(ObjectId())])
    def test_delete_absent_book_raises_not_found(self, book_service, book_id):
        with pytest.raises(NotFoundError):
            book_service.delete_book(book_id)
