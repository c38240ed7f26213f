"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.core.services import BookService, DocumentStoreService


def get_document_store(request: Request) -> DocumentStoreService:
    """Get the document store service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.document_store


def get_book_service(request: Request) -> BookService:
    """Get the Book service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.book_service
