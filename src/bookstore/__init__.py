"""Bookstore catalog.

This package contains the catalog REST service (FastAPI over a MongoDB
collection), its configuration and logging setup, and the Python client used
to list, create, edit, delete and view book records.
"""

__version__ = "0.1.0"
