"""Catalog client: HTTP API access, view-models and terminal rendering."""

from .api import ApiError, CatalogApiClient
from .cancellation import CancellationToken
from .validation import FormValidationError, validate_book_form
from .views import (
    BookDetailView,
    BookListView,
    CreateBookView,
    DeleteBookView,
    EditBookView,
    Notification,
    ViewState,
)

__all__ = [
    "ApiError",
    "BookDetailView",
    "BookListView",
    "CancellationToken",
    "CatalogApiClient",
    "CreateBookView",
    "DeleteBookView",
    "EditBookView",
    "FormValidationError",
    "Notification",
    "ViewState",
    "validate_book_form",
]
