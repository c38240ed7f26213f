"""Rich renderables for the catalog views."""

from datetime import datetime

from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from src.bookstore.client.views import (
    BookDetailView,
    BookListView,
    Notification,
    View,
    ViewState,
)
from src.bookstore.entities.book import Book

NOT_AVAILABLE = "N/A"
NO_BOOKS = "No books available"

_VARIANT_STYLES = {
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def _value(value: object) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE
    if isinstance(value, datetime):
        return value.strftime("%a %b %d %Y %H:%M:%S %Z")
    return str(value)


def render_loading(message: str = "Loading...") -> RenderableType:
    return Spinner("dots", text=message)


def render_error(view: View, retryable: bool = True) -> RenderableType:
    text = Text(view.error or "Something went wrong", style="red")
    if retryable:
        text.append("  (retry available)", style="blue underline")
    return text


def books_table(books: list[Book]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("No", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Author", style="green")
    table.add_column("Publish Year", style="yellow")
    table.add_column("ID", style="dim")
    for index, book in enumerate(books, start=1):
        table.add_row(
            str(index), book.title, book.author, str(book.publish_year), book.id
        )
    return table


def book_card(book: Book) -> Panel:
    body = Text()
    body.append(f"{book.publish_year}\n", style="bold red")
    body.append(f"{book.title}\n", style="bold")
    body.append(book.author, style="green")
    return Panel(body, title=book.id, title_align="left", border_style="sky_blue1")


def books_cards(books: list[Book]) -> Columns:
    return Columns([book_card(book) for book in books], equal=True, expand=True)


def render_book_list(view: BookListView) -> RenderableType:
    if view.state is ViewState.ERROR:
        return render_error(view)
    if view.state is ViewState.LOADING:
        return render_loading("Loading books...")
    if not view.books:
        return Text(NO_BOOKS, style="yellow")
    if view.display == "card":
        return books_cards(view.books)
    return books_table(view.books)


def book_details(book: Book) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="grey50")
    table.add_column()
    table.add_row("ID", _value(book.id))
    table.add_row("Title", _value(book.title))
    table.add_row("Author", _value(book.author))
    table.add_row("Publish Year", _value(book.publish_year))
    table.add_row("Create Time", _value(book.created_at))
    table.add_row("Last Update Time", _value(book.updated_at))
    return Panel.fit(table, title="Show Book", border_style="sky_blue1")


def render_book_detail(view: BookDetailView) -> RenderableType:
    if view.state is ViewState.ERROR:
        return render_error(view)
    if view.state is ViewState.LOADING or view.book is None:
        return render_loading("Loading book...")
    return book_details(view.book)


def render_notification(notification: Notification) -> Text:
    return Text(notification.message, style=_VARIANT_STYLES[notification.variant])


def print_notifications(console: Console, view: View) -> None:
    """Print and clear the view's pending toasts."""
    notifications = view.drain_notifications()
    if notifications:
        console.print(Group(*(render_notification(n) for n in notifications)))
