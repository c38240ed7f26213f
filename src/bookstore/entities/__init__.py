"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and request/response shapes
- document.py: Mapping to and from stored documents
- repository.py: Data access layer
"""

from .book import Book, BookList, BookPayload, BookRepository

__all__ = [
    "Book",
    "BookList",
    "BookPayload",
    "BookRepository",
]
