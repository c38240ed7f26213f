"""Book document mapping.

Books are stored in MongoDB with camelCase keys and an ObjectId ``_id``::

    {"_id": ObjectId(...), "title": ..., "author": ..., "publishYear": 1965,
     "createdAt": datetime, "updatedAt": datetime}
"""

from datetime import datetime
from typing import Any

from bson import ObjectId

from src.bookstore.entities.book.entity import Book


def parse_object_id(book_id: str) -> ObjectId | None:
    """Return the ObjectId for ``book_id``, or None if it is malformed."""
    if not isinstance(book_id, str) or not ObjectId.is_valid(book_id):
        return None
    return ObjectId(book_id)


def field_values(title: str, author: str, publish_year: int) -> dict[str, Any]:
    """The replaceable fields of a book document."""
    return {"title": title, "author": author, "publishYear": publish_year}


def new_document(
    title: str, author: str, publish_year: int, now: datetime
) -> dict[str, Any]:
    document = field_values(title, author, publish_year)
    document["createdAt"] = now
    document["updatedAt"] = now
    return document


def from_document(document: dict[str, Any]) -> Book:
    """Convert a stored document into a Book entity."""
    return Book(
        id=str(document["_id"]),
        title=document["title"],
        author=document["author"],
        publish_year=document["publishYear"],
        created_at=document["createdAt"],
        updated_at=document["updatedAt"],
    )
