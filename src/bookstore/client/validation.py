"""Client-side form checks.

These only short-circuit obviously invalid submissions before a round trip;
the service repeats its own checks and stays authoritative.
"""

from src.bookstore.entities.book import BookPayload

FIELDS_REQUIRED = "All fields are required"
INVALID_YEAR = "Publish Year must be a valid positive number"


class FormValidationError(ValueError):
    """A book form was rejected before being sent."""


def validate_book_form(
    title: str | None, author: str | None, publish_year: str | int | None
) -> BookPayload:
    """Check a book form and return the payload to send."""
    title = (title or "").strip()
    author = (author or "").strip()
    year_text = "" if publish_year is None else str(publish_year).strip()

    if not title or not author or not year_text:
        raise FormValidationError(FIELDS_REQUIRED)

    try:
        year = int(year_text)
    except ValueError:
        raise FormValidationError(INVALID_YEAR) from None
    if year < 0:
        raise FormValidationError(INVALID_YEAR)

    return BookPayload(title=title, author=author, publish_year=year)
