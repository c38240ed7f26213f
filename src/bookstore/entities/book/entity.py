"""Entity: Book."""

from typing import Any

from pydantic import Field, field_validator

from src.bookstore.entities._base import CamelModel, Entity

REQUIRED_FIELDS = ("title", "author", "publishYear")


class Book(Entity):
    """Book entity representing a catalog record.

    Serialised as ``{id, title, author, publishYear, createdAt, updatedAt}``.
    """

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    publish_year: int = Field(description="Year of publication")

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.publish_year == other.publish_year
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.title,
            self.author,
            self.publish_year,
        ))


class BookPayload(CamelModel):
    """Request body for creating or replacing a book.

    Every field is optional at parse time; presence is checked by the
    service so that a missing field is reported as a validation error.
    """

    title: str | None = None
    author: str | None = None
    publish_year: int | None = None

    @field_validator("publish_year", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        # JSON true/false would otherwise coerce to 1/0
        if isinstance(value, bool):
            raise ValueError("Input should be a valid integer")
        return value

    @field_validator("title", "author")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def missing_fields(self) -> list[str]:
        """Wire names of the required fields that are absent or blank."""
        values = {
            "title": self.title,
            "author": self.author,
            "publishYear": self.publish_year,
        }
        return [name for name in REQUIRED_FIELDS if values[name] is None]


class BookList(CamelModel):
    """All books in the catalog together with their count."""

    count: int
    data: list[Book]
