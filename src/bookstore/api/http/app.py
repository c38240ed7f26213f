"""FastAPI application: middleware, error mapping, routers and lifecycle."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse, PlainTextResponse

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.http.middleware import (
    REQUEST_ID_HEADER,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from src.bookstore.api.http.routers.books import router as books_router
from src.bookstore.api.http.routers.health import router as health_router
from src.bookstore.api.utils.app_startup import configure_logging
from src.bookstore.core.errors import CatalogError
from src.bookstore.core.services import BookService, DocumentStoreService
from src.bookstore.entities.book import BookRepository
from src.bookstore.runtime.context import get_config

WELCOME_MESSAGE = "Welcome to the Bookstore"

configure_logging()


async def startup() -> None:
    """Connect the document store and build the services."""
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    document_store = DocumentStoreService()
    app.state.app_dependencies = ApplicationDependencies(
        document_store=document_store,
        book_service=BookService(BookRepository(document_store.books)),
    )

    # The ping blocks for up to server_selection_timeout_ms
    if not await asyncio.to_thread(document_store.health_check):
        if config.app.environment == "production":
            raise RuntimeError("Document store is not reachable")
        logger.warning("Document store is not reachable; requests will fail until it is")


async def shutdown() -> None:
    logger.info("Shutting down application")
    dependencies: ApplicationDependencies = app.state.app_dependencies
    dependencies.document_store.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


_production = get_config().app.environment == "production"
app = FastAPI(
    title="Bookstore",
    lifespan=lifespan,
    docs_url=None if _production else "/docs",
    redoc_url=None if _production else "/redoc",
)

__all__ = ["app", "startup", "shutdown"]

# Last added runs outermost, so CORS headers reach the 500 fallback too
cors = get_config().app.cors
if cors.allow_credentials and "*" in cors.origins:
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' origins with allow_credentials=True"
    )

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


def _error_response(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "-")
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "request_id": request_id, **extra},
        headers={REQUEST_ID_HEADER: request_id},
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    problems = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in errors
    ]
    logger.bind(status_code=400).warning("request.validation_error: {}", problems)
    return _error_response(
        request,
        400,
        "Invalid request: " + "; ".join(problems),
        detail=jsonable_encoder(errors),
    )


app.include_router(books_router, prefix="/books")
app.include_router(health_router)


@app.get("/", response_class=PlainTextResponse)
async def welcome() -> str:
    """Landing endpoint."""
    return WELCOME_MESSAGE
