import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Body, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from book import Book
from config import Settings, settings
from library import Library, BookNotFoundError, InvalidBookError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# (method, path) pairs served by this API, in the order they are announced at startup
ROUTES = (
    ("GET", "/books"),
    ("GET", "/books/:id"),
    ("POST", "/books"),
    ("PUT", "/books/:id"),
    ("DELETE", "/books/:id"),
)

INVALID_CREATE_MESSAGE = 'Bad Request: Both "title" and "author" are required to add a new book.'
MALFORMED_BODY_MESSAGE = "Bad Request: request body must be a JSON object."


# --- Models ---
class BookModel(BaseModel):
    id: str
    title: str
    author: str

class BookCreateModel(BaseModel):
    # Any JSON value; presence and coercion are handled by TextValidator
    title: Any = None
    author: Any = None

class UpdateBookModel(BaseModel):
    title: Any = None
    author: Any = None

class MessageResponse(BaseModel):
    message: str

class BookResponse(MessageResponse):
    data: BookModel

class BookListResponse(MessageResponse):
    data: List[BookModel]


# --- Dependencies ---
def get_library(request: Request) -> Library:
    """Return the store owned by the running application."""
    return request.app.state.library


def _book_model(book: Book) -> BookModel:
    return BookModel(**book.to_dict())


def create_app(library: Optional[Library] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around a book store.

    A fresh seeded ``Library`` is created when none is given; tests pass
    their own store with deterministic ids.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running on %s", app_settings.base_url)
        logger.info("API Endpoints:")
        for method, path in ROUTES:
            logger.info("  %-6s %s", method, path)
        yield
        logger.info("Shutting down, %d books discarded", len(app.state.library))

    app = FastAPI(title=app_settings.app_name, version=app_settings.app_version,
                  debug=app_settings.debug, lifespan=lifespan)
    app.state.library = library if library is not None else Library()

    # --- Error envelope ---
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"message": MALFORMED_BODY_MESSAGE})

    # --- Endpoints ---
    @app.get("/books", response_model=BookListResponse)
    def list_books(lib: Library = Depends(get_library)):
        """Return every book in insertion order."""
        return BookListResponse(
            message="Successfully retrieved all books",
            data=[_book_model(b) for b in lib.list_books()],
        )

    @app.get("/books/{book_id}", response_model=BookResponse,
             responses={404: {"model": MessageResponse}})
    def get_book(book_id: str, lib: Library = Depends(get_library)):
        try:
            book = lib.find_book(book_id)
        except BookNotFoundError as e:
            logger.warning("Lookup failed: %s", e)
            raise HTTPException(status_code=404, detail=str(e))
        return BookResponse(
            message=f"Successfully retrieved book with ID '{book_id}'",
            data=_book_model(book),
        )

    @app.post("/books", response_model=BookResponse, status_code=201,
              responses={400: {"model": MessageResponse}})
    def add_book(payload: Optional[BookCreateModel] = Body(default=None),
                 lib: Library = Depends(get_library)):
        """Add a new book. Both title and author must be present."""
        payload = payload or BookCreateModel()
        try:
            book = lib.add_book(payload.title, payload.author)
        except InvalidBookError as e:
            logger.warning("Create rejected: %s", e)
            raise HTTPException(status_code=400, detail=INVALID_CREATE_MESSAGE)
        return BookResponse(message="Book added successfully", data=_book_model(book))

    @app.put("/books/{book_id}", response_model=BookResponse,
             responses={404: {"model": MessageResponse}})
    def update_book(book_id: str, update: Optional[UpdateBookModel] = Body(default=None),
                    lib: Library = Depends(get_library)):
        """Update the title and/or author of a book. Omitted fields are kept."""
        update = update or UpdateBookModel()
        try:
            book = lib.update_book(book_id, title=update.title, author=update.author)
        except BookNotFoundError as e:
            logger.warning("Update failed: %s", e)
            raise HTTPException(status_code=404, detail=str(e))
        return BookResponse(
            message=f"Book with ID '{book_id}' updated successfully",
            data=_book_model(book),
        )

    @app.delete("/books/{book_id}", response_model=MessageResponse,
                responses={404: {"model": MessageResponse}})
    def delete_book(book_id: str, lib: Library = Depends(get_library)):
        try:
            lib.remove_book(book_id)
        except BookNotFoundError:
            logger.warning("Delete failed: no book with ID %r", book_id)
            raise HTTPException(
                status_code=404,
                detail=f"Book with ID '{book_id}' not found. No book was deleted.",
            )
        return MessageResponse(message=f"Book with ID '{book_id}' deleted successfully.")

    return app


app = create_app()
