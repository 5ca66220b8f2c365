import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from book import Book
from database import DataAccessError, initialize_database
from repository import BookRepository

logger = logging.getLogger(__name__)


@dataclass
class BookListResult:
    """Outcome of listing the catalog.

    ``books`` is empty both when the table has no rows and when the query
    failed; ``failed`` tells the two apart.
    """

    books: List[Book] = field(default_factory=list)
    failed: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.books


class Library:
    """Book service: orchestrates catalog operations over the repository."""

    def __init__(self, db_file: Optional[str] = None, repository: Optional[BookRepository] = None) -> None:
        self.repository = repository or BookRepository(db_file)
        initialize_database(self.repository.db_file)  # Ensure tables exist

    # ------------------------- Reads ------------------------- #
    def list_books(self) -> BookListResult:
        """All books ordered by title. A failing query yields an empty, failed result."""
        try:
            return BookListResult(books=self.repository.list_books())
        except DataAccessError:
            logger.exception("Could not load the book list")
            return BookListResult(failed=True)

    def get_book(self, book_id: int) -> Book:
        return self.repository.get_book(book_id)

    def get_latest_book(self) -> Book:
        return self.repository.get_latest_book()

    # ------------------------- Writes ------------------------- #
    def register_book(self, book: Book) -> int:
        """Stamp the write timestamps, insert the book and return its new id."""
        now = datetime.now().isoformat(sep=" ", timespec="seconds")
        book.reg_date = now
        book.upd_date = now
        book.id = self.repository.insert_book(book)
        logger.info("Registered book %s (%s)", book.id, book.title)
        return book.id

    def delete_book(self, book_id: int) -> None:
        self.repository.delete_book(book_id)
        logger.info("Deleted book %s", book_id)
