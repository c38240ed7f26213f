"""Error taxonomy shared by the catalog service layers."""


class CatalogError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Missing or malformed input."""

    status_code = 400


class NotFoundError(CatalogError):
    """No document matches the requested identifier."""

    status_code = 404


class StoreError(CatalogError):
    """The document store rejected or failed an operation."""

    status_code = 500
