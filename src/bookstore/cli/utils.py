"""Shared utilities for CLI commands."""

from rich.console import Console

from src.bookstore.client import CatalogApiClient
from src.bookstore.runtime.config.settings import ClientSettings

# Initialize Rich console for colored output
console = Console()


def get_api_client(api_url: str | None = None) -> CatalogApiClient:
    """Build a client for the configured (or given) service URL."""
    settings = ClientSettings()
    return CatalogApiClient(api_url or settings.api_url)
