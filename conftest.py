import os

import pytest

from book import Book
from library import Library
from thumbnails import ThumbnailStorage


@pytest.fixture
def db_file(tmp_path, request):
    # A separate database file for each test
    path = str(tmp_path / f"test_{request.node.name}.db")
    yield path
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def lib(db_file):
    return Library(db_file=db_file)


@pytest.fixture
def storage(tmp_path):
    return ThumbnailStorage(upload_dir=str(tmp_path / "thumbnails"), base_url="/thumbnails")


@pytest.fixture
def make_book():
    def _make(**overrides):
        fields = {
            "title": "Go in Action",
            "author": "W. Kennedy",
            "publisher": "Manning",
            "publish_date": "20150101",
            "isbn": "9781617291784",
            "detail": "",
        }
        fields.update(overrides)
        return Book(**fields)
    return _make
