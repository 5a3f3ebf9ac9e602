import logging
import uuid
from threading import RLock
from typing import Any, Callable, Iterable, List, Optional, Set, Tuple

from book import Book
from validators import TextValidator

logger = logging.getLogger(__name__)

SEED_BOOKS: Tuple[Tuple[str, str], ...] = (
    ("The Great Gatsby", "F. Scott Fitzgerald"),
    ("1984", "George Orwell"),
    ("To Kill a Mockingbird", "Harper Lee"),
)

# Attempts at drawing an unused id before giving up
MAX_ID_ATTEMPTS = 5


def new_id() -> str:
    """Return a random RFC 4122 version 4 UUID string."""
    return str(uuid.uuid4())


class Library:
    """Manages the in-memory collection of books.

    Every public operation holds the store lock for its whole duration, so
    each one is atomic even when requests are served from a thread pool.
    Books handed back are copies taken under the lock; callers never see
    a book another thread is part way through changing.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = new_id,
        seed: Iterable[Tuple[str, str]] = SEED_BOOKS,
    ) -> None:
        self._id_factory = id_factory
        self._lock = RLock()
        # every id handed out, including those of removed books
        self._issued_ids: Set[str] = set()
        self.books: List[Book] = []
        for title, author in seed:
            self.books.append(Book(id=self._next_id(), title=title, author=author))

    # ------------------------- Core operations ------------------------- #
    def list_books(self) -> List[Book]:
        with self._lock:
            return [book.copy() for book in self.books]

    def find_book(self, book_id: str) -> Book:
        with self._lock:
            book = self._lookup(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            return book.copy()

    def add_book(self, title: Any, author: Any) -> Book:
        """Create a book from raw request values and append it.

        Presence is checked before trimming, so a whitespace-only value is
        accepted and stored as an empty string.
        """
        if not TextValidator.is_present(title) or not TextValidator.is_present(author):
            raise InvalidBookError('Both "title" and "author" are required to add a new book.')

        with self._lock:
            book = Book(
                id=self._next_id(),
                title=TextValidator.clean(title),
                author=TextValidator.clean(author),
            )
            self.books.append(book)
            snapshot = book.copy()
        logger.info("Added book %s (%r by %r)", snapshot.id, snapshot.title, snapshot.author)
        return snapshot

    def update_book(self, book_id: str, *, title: Any = None, author: Any = None) -> Book:
        """Overwrite title and/or author. ``None`` leaves a field as it is.

        Unlike creation, empty values are accepted here.
        """
        with self._lock:
            book = self._lookup(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            if title is not None:
                book.title = TextValidator.clean(title)
            if author is not None:
                book.author = TextValidator.clean(author)
            snapshot = book.copy()
        logger.info("Updated book %s", book_id)
        return snapshot

    def remove_book(self, book_id: str) -> None:
        with self._lock:
            for index, book in enumerate(self.books):
                if book.id == book_id:
                    del self.books[index]
                    break
            else:
                raise BookNotFoundError(book_id)
        logger.info("Removed book %s", book_id)

    # ------------------------- Utilities ------------------------- #
    def _lookup(self, book_id: str) -> Optional[Book]:
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def _next_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate
            logger.warning("Id generator returned an id it already issued: %s", candidate)
        raise RuntimeError(f"Could not generate an unused book id after {MAX_ID_ATTEMPTS} attempts.")

    def __len__(self) -> int:
        with self._lock:
            return len(self.books)


class BookNotFoundError(LookupError):
    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book with ID '{book_id}' not found.")
        self.book_id = book_id


class InvalidBookError(ValueError):
    pass
