import pytest

from validators import (
    BookValidator,
    ISBN_MESSAGE,
    PUBLISH_DATE_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    ValidationError,
)


def test_valid_book_has_no_violations(make_book):
    assert BookValidator.validate(make_book()) == []


@pytest.mark.parametrize("field", ["title", "author", "publisher"])
def test_missing_required_field(make_book, field):
    errors = BookValidator.validate(make_book(**{field: ""}))
    assert errors == [REQUIRED_FIELDS_MESSAGE]


def test_missing_publish_date_reports_required_and_format(make_book):
    errors = BookValidator.validate(make_book(publish_date=""))
    assert errors == [REQUIRED_FIELDS_MESSAGE, PUBLISH_DATE_MESSAGE]


def test_publish_date_format():
    assert BookValidator.is_valid_publish_date("20240131")
    assert not BookValidator.is_valid_publish_date("2024131")
    assert not BookValidator.is_valid_publish_date("2024-01-31")
    assert not BookValidator.is_valid_publish_date("20240131\n")
    # Full-width digits are rejected
    assert not BookValidator.is_valid_publish_date("２０２４０１３１")


def test_publish_date_is_not_calendar_checked(make_book):
    assert BookValidator.validate(make_book(publish_date="20241399")) == []


def test_seven_digit_publish_date_message(make_book):
    assert BookValidator.validate(make_book(publish_date="2024131")) == [PUBLISH_DATE_MESSAGE]


@pytest.mark.parametrize("isbn", ["1234567890", "1234567890123"])
def test_isbn_lengths_accepted(isbn):
    assert BookValidator.is_valid_isbn(isbn)


@pytest.mark.parametrize("isbn", ["12345", "123456789X", "12345678901", "", None, "978-1617291784"])
def test_isbn_rejected(isbn):
    assert not BookValidator.is_valid_isbn(isbn)


def test_short_isbn_message(make_book):
    assert BookValidator.validate(make_book(isbn="12345")) == [ISBN_MESSAGE]


def test_all_violations_are_accumulated(make_book):
    errors = BookValidator.validate(make_book(title="", isbn="12345"))
    assert errors == [REQUIRED_FIELDS_MESSAGE, ISBN_MESSAGE]


def test_every_rule_failing(make_book):
    errors = BookValidator.validate(make_book(title="", publish_date="abc", isbn=""))
    assert errors == [REQUIRED_FIELDS_MESSAGE, PUBLISH_DATE_MESSAGE, ISBN_MESSAGE]


def test_check_raises_with_messages(make_book):
    with pytest.raises(ValidationError) as exc_info:
        BookValidator.check(make_book(author="", isbn="1"))
    assert exc_info.value.messages == [REQUIRED_FIELDS_MESSAGE, ISBN_MESSAGE]


def test_check_passes_valid_book(make_book):
    BookValidator.check(make_book())
