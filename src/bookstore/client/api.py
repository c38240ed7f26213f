"""Async HTTP client for the catalog service."""

from typing import Any

import httpx
from loguru import logger

from src.bookstore.client.cancellation import CancellationToken
from src.bookstore.entities.book import Book, BookList, BookPayload


class ApiError(Exception):
    """A request to the catalog service failed.

    ``status_code`` is None when no response was received.
    """

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Request failed with status {response.status_code}"


class CatalogApiClient:
    """Issues the catalog's HTTP requests and decodes the responses.

    Every call accepts an optional :class:`CancellationToken`; cancelling it
    aborts the request and raises ``asyncio.CancelledError`` in the caller.
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> "CatalogApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("{} {} failed: {}", method, path, exc)
            raise ApiError(None, str(exc) or type(exc).__name__) from exc

        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response

    async def _request(
        self,
        method: str,
        path: str,
        token: CancellationToken | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        call = self._send(method, path, **kwargs)
        if token is None:
            return await call
        return await token.run(call)

    async def welcome(self, token: CancellationToken | None = None) -> str:
        response = await self._request("GET", "/", token)
        return response.text

    async def list_books(self, token: CancellationToken | None = None) -> BookList:
        response = await self._request("GET", "/books", token)
        return BookList.model_validate(response.json())

    async def get_book(
        self, book_id: str, token: CancellationToken | None = None
    ) -> Book:
        response = await self._request("GET", f"/books/{book_id}", token)
        return Book.model_validate(response.json())

    async def create_book(
        self, payload: BookPayload, token: CancellationToken | None = None
    ) -> Book:
        response = await self._request(
            "POST", "/books", token, json=payload.model_dump(by_alias=True)
        )
        return Book.model_validate(response.json())

    async def update_book(
        self,
        book_id: str,
        payload: BookPayload,
        token: CancellationToken | None = None,
    ) -> Book:
        response = await self._request(
            "PUT", f"/books/{book_id}", token, json=payload.model_dump(by_alias=True)
        )
        return Book.model_validate(response.json())

    async def delete_book(
        self, book_id: str, token: CancellationToken | None = None
    ) -> str:
        response = await self._request("DELETE", f"/books/{book_id}", token)
        return response.json().get("message", "")
