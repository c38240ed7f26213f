"""Book catalog CLI commands."""

import asyncio
from typing import Literal

import typer
from rich.panel import Panel

from src.bookstore.client import (
    BookDetailView,
    BookListView,
    CatalogApiClient,
    CreateBookView,
    DeleteBookView,
    EditBookView,
    ViewState,
)
from src.bookstore.client.render import (
    book_details,
    print_notifications,
    render_book_detail,
    render_book_list,
    render_error,
)
from src.bookstore.runtime.config.settings import ClientSettings

from .utils import console, get_api_client

books_app = typer.Typer(help="📚 Book catalog commands")

ApiUrlOption = typer.Option(None, "--api-url", help="Catalog service URL")


async def _load_with_retry(view: BookListView | BookDetailView | EditBookView) -> None:
    """Load a view, offering an inline retry while it fails."""
    load = view.load
    while True:
        with console.status("Loading..."):
            await load()
        if view.state is not ViewState.ERROR:
            return
        console.print(render_error(view))
        print_notifications(console, view)
        if not typer.confirm("Retry?", default=True):
            raise typer.Exit(1)
        load = view.retry


async def _list_books(api: CatalogApiClient, display: Literal["table", "card"]) -> None:
    view = BookListView(api, display=display)
    try:
        await _load_with_retry(view)
        console.print(
            Panel.fit(
                f"[bold cyan]Books List[/bold cyan] [dim]({len(view.books)})[/dim]",
                border_style="cyan",
            )
        )
        console.print(render_book_list(view))
    finally:
        view.teardown()
        await api.aclose()


@books_app.command("list")
def list_books(
    view: str | None = typer.Option(
        None, "--view", "-v", help="Display as 'table' or 'card' (default from BOOKSTORE_DEFAULT_VIEW)"
    ),
    api_url: str | None = ApiUrlOption,
) -> None:
    """📋 List every book in the catalog."""
    view = view or ClientSettings().default_view
    if view not in ("table", "card"):
        console.print("[red]❌ --view must be 'table' or 'card'[/red]")
        raise typer.Exit(2)
    asyncio.run(_list_books(get_api_client(api_url), view))


async def _show_book(api: CatalogApiClient, book_id: str) -> None:
    view = BookDetailView(api, book_id)
    try:
        await _load_with_retry(view)
        console.print(render_book_detail(view))
    finally:
        view.teardown()
        await api.aclose()


@books_app.command("show")
def show_book(
    book_id: str = typer.Argument(..., help="Book identifier"),
    api_url: str | None = ApiUrlOption,
) -> None:
    """🔎 Show one book."""
    asyncio.run(_show_book(get_api_client(api_url), book_id))


async def _create_book(
    api: CatalogApiClient, title: str, author: str, publish_year: str
) -> bool:
    view = CreateBookView(api)
    try:
        view.set_fields(title=title, author=author, publish_year=publish_year)
        with console.status("Saving..."):
            created = await view.submit()
        print_notifications(console, view)
        if created and view.saved is not None:
            console.print(book_details(view.saved))
        return created
    finally:
        view.teardown()
        await api.aclose()


@books_app.command("create")
def create_book(
    title: str = typer.Option(..., "--title", "-t", prompt=True, help="Book title"),
    author: str = typer.Option(..., "--author", "-a", prompt=True, help="Book author"),
    publish_year: str = typer.Option(
        ..., "--publish-year", "-y", prompt=True, help="Year of publication"
    ),
    api_url: str | None = ApiUrlOption,
) -> None:
    """➕ Create a book."""
    if not asyncio.run(_create_book(get_api_client(api_url), title, author, publish_year)):
        raise typer.Exit(1)


async def _edit_book(
    api: CatalogApiClient,
    book_id: str,
    title: str | None,
    author: str | None,
    publish_year: str | None,
) -> bool:
    view = EditBookView(api, book_id)
    try:
        await _load_with_retry(view)
        view.set_fields(title=title, author=author, publish_year=publish_year)
        with console.status("Saving..."):
            edited = await view.submit()
        print_notifications(console, view)
        if edited and view.saved is not None:
            console.print(book_details(view.saved))
        return edited
    finally:
        view.teardown()
        await api.aclose()


@books_app.command("edit")
def edit_book(
    book_id: str = typer.Argument(..., help="Book identifier"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    author: str | None = typer.Option(None, "--author", "-a", help="New author"),
    publish_year: str | None = typer.Option(
        None, "--publish-year", "-y", help="New year of publication"
    ),
    api_url: str | None = ApiUrlOption,
) -> None:
    """
    ✏️  Edit a book.

    The stored values are loaded first; only the options you pass replace them.
    """
    edited = asyncio.run(
        _edit_book(get_api_client(api_url), book_id, title, author, publish_year)
    )
    if not edited:
        raise typer.Exit(1)


async def _delete_book(api: CatalogApiClient, book_id: str) -> bool:
    view = DeleteBookView(api, book_id)
    try:
        with console.status("Deleting..."):
            deleted = await view.confirm()
        print_notifications(console, view)
        return deleted
    finally:
        view.teardown()
        await api.aclose()


@books_app.command("delete")
def delete_book(
    book_id: str = typer.Argument(..., help="Book identifier"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    api_url: str | None = ApiUrlOption,
) -> None:
    """🗑️  Delete a book."""
    if not yes and not typer.confirm("Are you sure you want to delete this book?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    if not asyncio.run(_delete_book(get_api_client(api_url), book_id)):
        raise typer.Exit(1)
