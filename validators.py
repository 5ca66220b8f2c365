import re
from typing import List, Optional

from book import Book

REQUIRED_FIELDS_MESSAGE = "Required fields are missing."
PUBLISH_DATE_MESSAGE = "Publish date must be 8 half-width digits in YYYYMMDD format."
ISBN_MESSAGE = "ISBN must be 10 or 13 digits."

_PUBLISH_DATE_RE = re.compile(r"^\d{8}$", re.ASCII)
_ISBN10_RE = re.compile(r"^\d{10}$", re.ASCII)
_ISBN13_RE = re.compile(r"^\d{13}$", re.ASCII)


class ValidationError(ValueError):
    """Carries every violation found for one submission."""

    def __init__(self, messages: List[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class BookValidator:
    """Field checks for a book submitted through the add form.
    Only the format is checked; the publish date is not checked against a calendar.
    """

    @staticmethod
    def has_required_fields(book: Book) -> bool:
        return all([book.title, book.author, book.publisher, book.publish_date])

    @staticmethod
    def is_valid_publish_date(publish_date: Optional[str]) -> bool:
        # fullmatch so a trailing newline does not slip past "$"
        return bool(publish_date) and _PUBLISH_DATE_RE.fullmatch(publish_date) is not None

    @staticmethod
    def is_valid_isbn(isbn: Optional[str]) -> bool:
        if not isbn:
            return False
        return _ISBN10_RE.fullmatch(isbn) is not None or _ISBN13_RE.fullmatch(isbn) is not None

    @staticmethod
    def validate(book: Book) -> List[str]:
        """Run every rule in order and return all violation messages."""
        errors: List[str] = []
        if not BookValidator.has_required_fields(book):
            errors.append(REQUIRED_FIELDS_MESSAGE)
        if not BookValidator.is_valid_publish_date(book.publish_date):
            errors.append(PUBLISH_DATE_MESSAGE)
        if not BookValidator.is_valid_isbn(book.isbn):
            errors.append(ISBN_MESSAGE)
        return errors

    @staticmethod
    def check(book: Book) -> None:
        errors = BookValidator.validate(book)
        if errors:
            raise ValidationError(errors)
