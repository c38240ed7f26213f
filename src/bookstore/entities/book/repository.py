"""Book repository over a MongoDB collection."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from loguru import logger
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from src.bookstore.core.errors import StoreError
from src.bookstore.entities._base import utc_now
from src.bookstore.entities.book.document import (
    field_values,
    from_document,
    new_document,
    parse_object_id,
)
from src.bookstore.entities.book.entity import Book


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver failures into StoreError with the driver's message."""
    try:
        yield
    except PyMongoError as exc:
        logger.bind(operation=operation, error_type=type(exc).__name__).error(
            "Document store operation failed: {}", exc
        )
        raise StoreError(str(exc)) from exc


class BookRepository:
    """Data-access layer for books.

    Every method is a single-document operation; the store is the sole
    arbiter of concurrent writes (last write wins).
    """

    def __init__(
        self, collection: Collection, clock: Callable[[], datetime] = utc_now
    ) -> None:
        self._collection = collection
        self._clock = clock

    def create(self, title: str, author: str, publish_year: int) -> Book:
        document = new_document(title, author, publish_year, self._clock())
        with _store_errors("insert_one"):
            result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return from_document(document)

    def list_all(self) -> list[Book]:
        with _store_errors("find"):
            documents = list(self._collection.find({}))
        return [from_document(document) for document in documents]

    def get(self, book_id: str) -> Book | None:
        object_id = parse_object_id(book_id)
        if object_id is None:
            return None
        with _store_errors("find_one"):
            document = self._collection.find_one({"_id": object_id})
        if document is None:
            return None
        return from_document(document)

    def update(
        self, book_id: str, title: str, author: str, publish_year: int
    ) -> Book | None:
        """Replace the book's fields; returns None when no document matches."""
        object_id = parse_object_id(book_id)
        if object_id is None:
            return None
        changes = field_values(title, author, publish_year)
        changes["updatedAt"] = self._clock()
        with _store_errors("find_one_and_update"):
            document = self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            return None
        return from_document(document)

    def delete(self, book_id: str) -> bool:
        object_id = parse_object_id(book_id)
        if object_id is None:
            return False
        with _store_errors("delete_one"):
            result = self._collection.delete_one({"_id": object_id})
        return result.deleted_count == 1

    def ensure_indexes(self) -> list[str]:
        """Create the indexes the catalog relies on; returns their names."""
        with _store_errors("create_index"):
            return [self._collection.create_index([("createdAt", ASCENDING)])]
