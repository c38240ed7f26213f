"""Tests for the `books` CLI commands."""

import httpx
import pytest
from bson import ObjectId
from typer.testing import CliRunner

from src.bookstore.cli import app as cli_app
from src.bookstore.client import CatalogApiClient

runner = CliRunner()


@pytest.fixture
def cli(app, monkeypatch):
    """Point every command at the in-process application."""

    def in_process_client(api_url=None):
        return CatalogApiClient(
            "http://testserver", transport=httpx.ASGITransport(app=app)
        )

    monkeypatch.setattr(
        "src.bookstore.cli.book_commands.get_api_client", in_process_client
    )
    return cli_app


def _create(cli, title="Dune", author="Herbert", year="1965"):
    return runner.invoke(
        cli, ["books", "create", "-t", title, "-a", author, "-y", year]
    )


def test_create_book(cli, books_collection):
    result = _create(cli)

    assert result.exit_code == 0
    assert "Book Created Successfully." in result.output
    assert books_collection.count_documents({"title": "Dune"}) == 1


def test_create_book_prompts_for_missing_options(cli, books_collection):
    result = runner.invoke(
        cli, ["books", "create"], input="Emma\nAusten\n1815\n"
    )

    assert result.exit_code == 0
    assert books_collection.count_documents({"author": "Austen"}) == 1


def test_create_book_invalid_year(cli, books_collection):
    result = _create(cli, year="soon")

    assert result.exit_code == 1
    assert "Publish Year must be a valid positive number" in result.output
    assert books_collection.count_documents({}) == 0


def test_list_books_table(cli):
    _create(cli)

    result = runner.invoke(cli, ["books", "list"])

    assert result.exit_code == 0
    assert "Books List" in result.output
    assert "Dune" in result.output


def test_list_books_cards(cli):
    _create(cli)

    result = runner.invoke(cli, ["books", "list", "--view", "card"])

    assert result.exit_code == 0
    assert "Herbert" in result.output


def test_list_books_empty(cli):
    result = runner.invoke(cli, ["books", "list"])

    assert result.exit_code == 0
    assert "No books available" in result.output


def test_list_rejects_unknown_view(cli):
    result = runner.invoke(cli, ["books", "list", "--view", "grid"])

    assert result.exit_code == 2


def test_show_book(cli, books_collection):
    _create(cli)
    book_id = str(books_collection.find_one()["_id"])

    result = runner.invoke(cli, ["books", "show", book_id])

    assert result.exit_code == 0
    assert "Show Book" in result.output
    assert "Dune" in result.output


def test_show_missing_book_declines_retry(cli):
    result = runner.invoke(cli, ["books", "show", str(ObjectId())], input="n\n")

    assert result.exit_code == 1
    assert "Failed to load book details" in result.output


def test_edit_book_keeps_unchanged_fields(cli, books_collection):
    _create(cli)
    book_id = str(books_collection.find_one()["_id"])

    result = runner.invoke(cli, ["books", "edit", book_id, "-t", "Dune Messiah"])

    assert result.exit_code == 0
    assert "Book Edited Successfully" in result.output
    stored = books_collection.find_one()
    assert stored["title"] == "Dune Messiah"
    assert stored["author"] == "Herbert"
    assert stored["publishYear"] == 1965


def test_delete_book_with_confirmation(cli, books_collection):
    _create(cli)
    book_id = str(books_collection.find_one()["_id"])

    result = runner.invoke(cli, ["books", "delete", book_id], input="y\n")

    assert result.exit_code == 0
    assert "Book Deleted Successfully." in result.output
    assert books_collection.count_documents({}) == 0


def test_delete_book_cancelled(cli, books_collection):
    _create(cli)
    book_id = str(books_collection.find_one()["_id"])

    result = runner.invoke(cli, ["books", "delete", book_id], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert books_collection.count_documents({}) == 1


def test_delete_missing_book(cli):
    result = runner.invoke(cli, ["books", "delete", str(ObjectId()), "--yes"])

    assert result.exit_code == 1
    assert "Book not found" in result.output
