"""Book entity module.

This module contains all Book-related classes organized by responsibility:
- Book: Domain entity, serialised with camelCase names
- BookPayload: Request body for create and update
- BookRepository: Data access layer over the MongoDB collection
"""

from .entity import Book, BookList, BookPayload
from .repository import BookRepository

__all__ = ["Book", "BookList", "BookPayload", "BookRepository"]
