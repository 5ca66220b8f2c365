import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

import database
from database import DataAccessError
from library import Library
from main import app
from ui_helpers import OUTPUT_MODE_ENV

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_db(db_file, monkeypatch):
    monkeypatch.setattr(database, "DATABASE_FILE", db_file)
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")
    return db_file


def test_init_db(cli_db):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0
    assert f"Database initialized: {cli_db}" in result.stdout


def test_list_no_books():
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No books in library." in result.stdout


def test_list_books(lib, make_book):
    first = lib.register_book(make_book(title="Refactoring", author="M. Fowler"))
    second = lib.register_book(make_book(title="Clean Code", author="R. Martin"))

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert lines == [f"{second} - Clean Code by R. Martin", f"{first} - Refactoring by M. Fowler"]


def test_list_books_json(lib, make_book):
    book_id = lib.register_book(make_book())

    result = runner.invoke(app, ["--output", "json", "list"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload == [{
        "id": book_id,
        "title": "Go in Action",
        "author": "W. Kennedy",
        "publisher": "Manning",
        "publish_date": "20150101",
    }]


def test_list_failure(monkeypatch):
    monkeypatch.setattr("repository.BookRepository.list_books", MagicMock(side_effect=DataAccessError("down")))
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "Book data could not be loaded." in result.stdout


def test_show_book(lib, make_book):
    book_id = lib.register_book(make_book(detail="Learn Go"))

    result = runner.invoke(app, ["show", str(book_id)])
    assert result.exit_code == 0
    assert "Title: Go in Action" in result.stdout
    assert "ISBN: 9781617291784" in result.stdout
    assert "Detail: Learn Go" in result.stdout


def test_show_missing_book():
    result = runner.invoke(app, ["show", "42"])
    assert result.exit_code == 1
    assert "Book with ID 42 not found." in result.stdout


def test_latest(lib, make_book):
    lib.register_book(make_book(title="Older"))
    lib.register_book(make_book(title="Newer"))

    result = runner.invoke(app, ["latest"])
    assert result.exit_code == 0
    assert "Title: Newer" in result.stdout


def test_latest_empty():
    result = runner.invoke(app, ["latest"])
    assert result.exit_code == 1
    assert "No books in library." in result.stdout


def test_remove_book(lib, make_book):
    book_id = lib.register_book(make_book())

    result = runner.invoke(app, ["remove", str(book_id)])
    assert result.exit_code == 0
    assert f"Book with ID {book_id} has been removed." in result.stdout
    assert lib.list_books().books == []


def test_remove_missing_book(lib, make_book):
    lib.register_book(make_book())
    result = runner.invoke(app, ["remove", "999"])
    assert result.exit_code == 0
    assert len(lib.list_books().books) == 1


def test_remove_uses_library(monkeypatch):
    rm_mock = MagicMock()
    monkeypatch.setattr(Library, "delete_book", rm_mock)

    result = runner.invoke(app, ["remove", "7"])
    assert result.exit_code == 0
    rm_mock.assert_called_once_with(7)


@patch("subprocess.run")
def test_serve_command(mock_subprocess_run):
    result = runner.invoke(app, ["serve", "--port", "9000"])
    assert result.exit_code == 0
    assert "Starting web UI on" in result.stdout
    mock_subprocess_run.assert_called_once()
    args = mock_subprocess_run.call_args[0][0]
    assert "uvicorn" in args
    assert "api:app" in args
    assert args[args.index("--port") + 1] == "9000"
    assert "--reload" not in args
