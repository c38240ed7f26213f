"""Book API router with CRUD operations."""

from fastapi import APIRouter, Depends, status

from src.bookstore.api.http.deps import get_book_service
from src.bookstore.core.services import BookService
from src.bookstore.entities.book import Book, BookList, BookPayload

router = APIRouter(tags=["books"])


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookPayload,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Create a new book."""
    return service.create_book(payload)


@router.get("", response_model=BookList)
def list_books(
    service: BookService = Depends(get_book_service),
) -> BookList:
    """List all books with their count."""
    return service.list_books()


@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Get a book by ID."""
    return service.get_book(book_id)


@router.put("/{book_id}", response_model=Book)
def update_book(
    book_id: str,
    payload: BookPayload,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Replace a book's title, author and publish year."""
    return service.update_book(book_id, payload)


@router.delete("/{book_id}")
def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> dict[str, str]:
    """Delete a book."""
    service.delete_book(book_id)
    return {"message": "Book deleted successfully"}
