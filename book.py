from __future__ import annotations


class Book:
    """Represents a single book in the catalog."""

    def __init__(self, title: str = "", author: str = "", publisher: str = "", publish_date: str = "",
                 isbn: str = "", detail: str | None = None, id: int | None = None,
                 # Thumbnail fields
                 thumbnail_name: str | None = None, thumbnail_url: str | None = None,
                 # Set by the server on write
                 reg_date: str | None = None, upd_date: str | None = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.publisher = publisher
        self.publish_date = publish_date
        self.isbn = isbn
        self.detail = detail
        self.thumbnail_name = thumbnail_name
        self.thumbnail_url = thumbnail_url
        self.reg_date = reg_date
        self.upd_date = upd_date

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Book id={self.id} title={self.title!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "publisher": self.publisher,
            "publish_date": self.publish_date,
            "isbn": self.isbn,
            "detail": self.detail,
            "thumbnail_name": self.thumbnail_name,
            "thumbnail_url": self.thumbnail_url,
            "reg_date": self.reg_date,
            "upd_date": self.upd_date,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # List queries only select a subset of the columns
        return Book(
            id=data.get("id"),
            title=data.get("title", ""),
            author=data.get("author", ""),
            publisher=data.get("publisher", ""),
            publish_date=data.get("publish_date", ""),
            isbn=data.get("isbn", ""),
            detail=data.get("detail"),
            thumbnail_name=data.get("thumbnail_name"),
            thumbnail_url=data.get("thumbnail_url"),
            reg_date=data.get("reg_date"),
            upd_date=data.get("upd_date"),
        )
