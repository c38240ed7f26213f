"""Database initialization script."""

from loguru import logger

from src.bookstore.core.services.database.db_session import DocumentStoreService
from src.bookstore.entities.book import BookRepository


def init_db(store: DocumentStoreService | None = None) -> list[str]:
    """Create the indexes used by the book collection."""
    owned = store is None
    store = store or DocumentStoreService()
    try:
        indexes = BookRepository(store.books).ensure_indexes()
        logger.info("Database initialized with indexes: {}", indexes)
        return indexes
    finally:
        if owned:
            store.close()


if __name__ == "__main__":
    init_db()
