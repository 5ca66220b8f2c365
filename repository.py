"""SQL for the books table.

Every value goes to sqlite as a bound parameter; nothing user-supplied is
formatted into the statement text.
"""
from typing import List, Optional

import database
from book import Book

LIST_SQL = (
    "SELECT id, title, author, publisher, publish_date, thumbnail_url "
    "FROM books ORDER BY title"
)
GET_SQL = "SELECT * FROM books WHERE id = ?"
LATEST_SQL = "SELECT * FROM books WHERE id = (SELECT MAX(id) FROM books)"
INSERT_SQL = (
    "INSERT INTO books (title, author, publisher, publish_date, thumbnail_name, "
    "thumbnail_url, detail, isbn, reg_date, upd_date) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
DELETE_SQL = "DELETE FROM books WHERE id = ?"


class BookRepository:
    """Data access for books. Holds only the database file it talks to."""

    def __init__(self, db_file: Optional[str] = None) -> None:
        self.db_file = db_file

    def list_books(self) -> List[Book]:
        rows = database.fetch_all(LIST_SQL, db_file=self.db_file)
        return [Book.from_dict(row) for row in rows]

    def get_book(self, book_id: int) -> Book:
        try:
            row = database.fetch_one(GET_SQL, (book_id,), db_file=self.db_file)
        except database.NotFoundError as e:
            raise database.NotFoundError(f"Book {book_id} not found.") from e
        return Book.from_dict(row)

    def get_latest_book(self) -> Book:
        try:
            row = database.fetch_one(LATEST_SQL, db_file=self.db_file)
        except database.NotFoundError as e:
            raise database.NotFoundError("No books registered.") from e
        return Book.from_dict(row)

    def insert_book(self, book: Book) -> int:
        """Insert a row and return the id the store generated for it."""
        return database.execute(
            INSERT_SQL,
            (
                book.title,
                book.author,
                book.publisher,
                book.publish_date,
                book.thumbnail_name,
                book.thumbnail_url,
                book.detail,
                book.isbn,
                book.reg_date,
                book.upd_date,
            ),
            db_file=self.db_file,
        )

    def delete_book(self, book_id: int) -> None:
        # No rowcount check: deleting a missing id is not an error
        database.execute(DELETE_SQL, (book_id,), db_file=self.db_file)
