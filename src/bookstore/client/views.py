"""View-models for the catalog client.

Each view issues one category of request and is always in exactly one of
three states: loading, error or success. A view owns a cancellation token;
``teardown()`` cancels it, and a view that has been torn down never changes
state again.
"""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeVar

from loguru import logger

from src.bookstore.client.api import ApiError, CatalogApiClient
from src.bookstore.client.cancellation import CancellationToken
from src.bookstore.client.validation import FormValidationError, validate_book_form
from src.bookstore.entities.book import Book, BookPayload

T = TypeVar("T")

DisplayMode = Literal["table", "card"]


class ViewState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class Notification:
    """A transient toast message."""

    message: str
    variant: Literal["success", "warning", "error"]


class _TornDown(Exception):
    """Raised internally when a request was cancelled by teardown."""


class View:
    """Shared state handling for every view."""

    def __init__(self, api: CatalogApiClient) -> None:
        self._api = api
        self._token = CancellationToken()
        self.state = ViewState.LOADING
        self.error: str | None = None
        self.notifications: list[Notification] = []

    @property
    def torn_down(self) -> bool:
        return self._token.cancelled

    def teardown(self) -> None:
        """Cancel in-flight requests and freeze the view."""
        self._token.cancel()

    def notify(self, message: str, variant: Literal["success", "warning", "error"]) -> None:
        self.notifications.append(Notification(message, variant))

    def drain_notifications(self) -> list[Notification]:
        notifications, self.notifications = self.notifications, []
        return notifications

    async def _call(self, request: Awaitable[T]) -> T:
        try:
            return await request
        except asyncio.CancelledError:
            if self._token.cancelled:
                raise _TornDown from None
            raise

    def _begin(self) -> None:
        self.state = ViewState.LOADING
        self.error = None

    def _fail(self, message: str) -> None:
        self.state = ViewState.ERROR
        self.error = message

    def _succeed(self) -> None:
        self.state = ViewState.SUCCESS
        self.error = None


class BookListView(View):
    """All books, shown as a table or as cards."""

    FETCH_FAILED = "Failed to fetch books."

    def __init__(self, api: CatalogApiClient, display: DisplayMode = "table") -> None:
        super().__init__(api)
        self.display: DisplayMode = display
        self.books: list[Book] = []

    def show_as(self, display: DisplayMode) -> None:
        if display not in ("table", "card"):
            raise ValueError(f"Unknown display mode: {display}")
        self.display = display

    def toggle(self) -> DisplayMode:
        self.display = "card" if self.display == "table" else "table"
        return self.display

    async def load(self) -> None:
        if self.torn_down:
            return
        self._begin()
        try:
            result = await self._call(self._api.list_books(token=self._token))
        except _TornDown:
            return
        except ApiError as exc:
            logger.warning("Listing books failed: {}", exc.message)
            self._fail(self.FETCH_FAILED)
            return
        self.books = result.data
        self._succeed()

    retry = load


class BookDetailView(View):
    """A single book with its timestamps."""

    LOAD_FAILED = "Failed to load book details. Please try again later."

    def __init__(self, api: CatalogApiClient, book_id: str) -> None:
        super().__init__(api)
        self.book_id = book_id
        self.book: Book | None = None

    async def load(self) -> None:
        if self.torn_down:
            return
        self._begin()
        try:
            book = await self._call(self._api.get_book(self.book_id, token=self._token))
        except _TornDown:
            return
        except ApiError as exc:
            logger.warning("Loading book {} failed: {}", self.book_id, exc.message)
            self._fail(self.LOAD_FAILED)
            return
        self.book = book
        self._succeed()

    retry = load


class _BookFormView(View):
    """Title / author / publish-year form."""

    def __init__(self, api: CatalogApiClient) -> None:
        super().__init__(api)
        self.title = ""
        self.author = ""
        self.publish_year = ""
        self.saved: Book | None = None

    def set_fields(
        self,
        title: str | None = None,
        author: str | None = None,
        publish_year: str | int | None = None,
    ) -> None:
        """Overwrite the given fields, keeping the others."""
        if title is not None:
            self.title = title
        if author is not None:
            self.author = author
        if publish_year is not None:
            self.publish_year = str(publish_year)

    def _validated(self) -> BookPayload | None:
        try:
            return validate_book_form(self.title, self.author, self.publish_year)
        except FormValidationError as exc:
            self.notify(str(exc), "warning")
            return None


class CreateBookView(_BookFormView):
    """Empty form that creates a book on submit."""

    CREATED = "Book Created Successfully."
    CREATE_FAILED = "Error creating the book"

    def __init__(self, api: CatalogApiClient) -> None:
        super().__init__(api)
        # Nothing to fetch: the empty form is ready immediately
        self.state = ViewState.SUCCESS

    async def submit(self) -> bool:
        """Validate and create; True once the book is stored."""
        if self.torn_down:
            return False
        payload = self._validated()
        if payload is None:
            return False

        self._begin()
        try:
            book = await self._call(self._api.create_book(payload, token=self._token))
        except _TornDown:
            return False
        except ApiError as exc:
            message = exc.message if exc.status_code is not None else self.CREATE_FAILED
            self._fail(message)
            self.notify(message, "error")
            return False

        self.saved = book
        self.title = self.author = self.publish_year = ""
        self._succeed()
        self.notify(self.CREATED, "success")
        return True


class EditBookView(_BookFormView):
    """Form pre-populated from the stored book; replaces it on submit."""

    LOAD_FAILED = "Failed to load book details. Please try again."
    EDITED = "Book Edited Successfully"
    EDIT_FAILED = "Failed to edit the book. Please try again."

    def __init__(self, api: CatalogApiClient, book_id: str) -> None:
        super().__init__(api)
        self.book_id = book_id

    async def load(self) -> None:
        if self.torn_down:
            return
        self._begin()
        try:
            book = await self._call(self._api.get_book(self.book_id, token=self._token))
        except _TornDown:
            return
        except ApiError as exc:
            logger.warning("Loading book {} failed: {}", self.book_id, exc.message)
            self._fail(self.LOAD_FAILED)
            self.notify(self.LOAD_FAILED, "error")
            return
        self.title = book.title
        self.author = book.author
        self.publish_year = str(book.publish_year)
        self._succeed()

    retry = load

    async def submit(self) -> bool:
        if self.torn_down:
            return False
        payload = self._validated()
        if payload is None:
            return False

        self._begin()
        try:
            book = await self._call(
                self._api.update_book(self.book_id, payload, token=self._token)
            )
        except _TornDown:
            return False
        except ApiError as exc:
            logger.warning("Editing book {} failed: {}", self.book_id, exc.message)
            self._fail(self.EDIT_FAILED)
            self.notify(self.EDIT_FAILED, "error")
            return False

        self.saved = book
        self._succeed()
        self.notify(self.EDITED, "success")
        return True


class DeleteBookView(View):
    """Confirmation step before deleting a book."""

    DELETED = "Book Deleted Successfully."
    DELETE_FAILED = "An error occurred while deleting the book."

    def __init__(self, api: CatalogApiClient, book_id: str) -> None:
        super().__init__(api)
        self.book_id = book_id
        # The confirmation prompt needs no data
        self.state = ViewState.SUCCESS

    async def confirm(self) -> bool:
        """Delete the book; True once the service confirmed."""
        if self.torn_down:
            return False
        self._begin()
        try:
            await self._call(self._api.delete_book(self.book_id, token=self._token))
        except _TornDown:
            return False
        except ApiError as exc:
            message = exc.message if exc.status_code is not None else self.DELETE_FAILED
            self._fail(message)
            self.notify(message, "error")
            return False

        self._succeed()
        self.notify(self.DELETED, "success")
        return True
