from dataclasses import dataclass

from src.bookstore.core.services import BookService, DocumentStoreService


@dataclass
class ApplicationDependencies:
    document_store: DocumentStoreService
    book_service: BookService
