"""Catalog operations on books."""

from loguru import logger

from src.bookstore.core.errors import NotFoundError, ValidationError
from src.bookstore.entities.book import Book, BookList, BookPayload, BookRepository

BOOK_NOT_FOUND = "Book not found"


class BookService:
    """Create, list, fetch, replace and delete books.

    Validation here is authoritative: the client-side checks only short-circuit
    obviously invalid submissions and are never trusted.
    """

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    @staticmethod
    def _require_fields(payload: BookPayload) -> tuple[str, str, int]:
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(
                "Send all required fields: title, author, publishYear "
                f"(missing: {', '.join(missing)})"
            )
        return payload.title, payload.author, payload.publish_year

    def create_book(self, payload: BookPayload) -> Book:
        title, author, publish_year = self._require_fields(payload)
        book = self._repository.create(title, author, publish_year)
        logger.info("Created book {}", book.id)
        return book

    def list_books(self) -> BookList:
        books = self._repository.list_all()
        return BookList(count=len(books), data=books)

    def get_book(self, book_id: str) -> Book:
        book = self._repository.get(book_id)
        if book is None:
            logger.warning("Book {} not found", book_id)
            raise NotFoundError(BOOK_NOT_FOUND)
        return book

    def update_book(self, book_id: str, payload: BookPayload) -> Book:
        title, author, publish_year = self._require_fields(payload)
        book = self._repository.update(book_id, title, author, publish_year)
        if book is None:
            logger.warning("Book {} not found for update", book_id)
            raise NotFoundError(BOOK_NOT_FOUND)
        logger.info("Updated book {}", book.id)
        return book

    def delete_book(self, book_id: str) -> None:
        if not self._repository.delete(book_id):
            logger.warning("Book {} not found for delete", book_id)
            raise NotFoundError(BOOK_NOT_FOUND)
        logger.info("Deleted book {}", book_id)
