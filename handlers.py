"""Request workflows for the catalog screens.

Each handler takes its collaborators as arguments, does its work and returns
the ``View`` to render. None of them keep state between requests.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from book import Book
from library import Library
from thumbnails import StorageError, ThumbnailStorage
from validators import BookValidator

logger = logging.getLogger(__name__)

HOME_VIEW = "home.html"
ADD_BOOK_VIEW = "addBook.html"
DETAILS_VIEW = "details.html"

NO_DATA_MESSAGE = "No book data."
LIST_FAILED_MESSAGE = "Book data could not be loaded."
STORAGE_ERROR_MESSAGE = "Thumbnail upload failed."


@dataclass
class View:
    template: str
    context: Dict[str, Any] = field(default_factory=dict)


def book_from_form(title: str = "", author: str = "", publisher: str = "", publish_date: str = "",
                   isbn: str = "", detail: str = "") -> Book:
    """Build an unsaved Book from the add form fields. Values are kept as submitted."""
    return Book(
        title=title or "",
        author=author or "",
        publisher=publisher or "",
        publish_date=publish_date or "",
        isbn=isbn or "",
        detail=detail or "",
    )


def home(library: Library) -> View:
    result = library.list_books()
    if not result.is_empty:
        return View(HOME_VIEW, {"book_list": result.books})
    message = LIST_FAILED_MESSAGE if result.failed else NO_DATA_MESSAGE
    return View(HOME_VIEW, {"result_message": message})


def add_book_form() -> View:
    return View(ADD_BOOK_VIEW)


def insert_book(book: Book, library: Library, storage: ThumbnailStorage,
                thumbnail_filename: Optional[str] = None, thumbnail_data: Optional[bytes] = None) -> View:
    """Validate a submitted book, store its thumbnail and register it.

    Storage failures and validation violations re-render the add form with
    the submitted values; nothing is persisted in either case.
    """
    if thumbnail_data:
        try:
            key = storage.store(thumbnail_filename or "", thumbnail_data)
            book.thumbnail_name = key
            book.thumbnail_url = storage.resolve_url(key)
        except StorageError:
            logger.exception("Thumbnail upload failed for %r", thumbnail_filename)
            return View(ADD_BOOK_VIEW, {"book_info": book, "error_list": [STORAGE_ERROR_MESSAGE]})

    errors = BookValidator.validate(book)
    if errors:
        logger.info("Rejected book submission: %s", errors)
        return View(ADD_BOOK_VIEW, {"book_info": book, "error_list": errors})

    book_id = library.register_book(book)
    # Fetch by the id the insert returned, not by max(id)
    return View(DETAILS_VIEW, {"book_details_info": library.get_book(book_id)})


def book_details(book_id: int, library: Library) -> View:
    return View(DETAILS_VIEW, {"book_details_info": library.get_book(book_id)})


def delete_book(book_id: int, library: Library) -> View:
    library.delete_book(book_id)
    return home(library)
