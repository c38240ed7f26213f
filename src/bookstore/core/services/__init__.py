"""Core services exports."""

# Book Services
from .book_service import BookService

# Database Service
from .database.db_session import DocumentStoreService

__all__ = [
    # Book Services
    "BookService",
    # Database Service
    "DocumentStoreService",
]
