import json
import os
from typing import Any, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Environment variable controlling CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def print_list_result(books: List[Any], message: str = "No books in library.") -> None:
    """Print the book list in the current output mode.
    - plain: 'ID - Title by Author' lines, or the empty message
    - json: JSON array of id, title, author, publisher, publish_date
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print(message)
        return

    if mode == "json":
        payload = [
            {
                "id": b.id,
                "title": b.title,
                "author": b.author,
                "publisher": b.publisher,
                "publish_date": b.publish_date,
            }
            for b in books
        ]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Publisher", style="white")
        table.add_column("Published", style="white")
        for b in books:
            table.add_row(str(b.id), b.title, b.author, b.publisher, b.publish_date)
        _console.print(table)
    else:
        for b in books:
            print(f"{b.id} - {b.title} by {b.author}")


def print_book_details(book: Any) -> None:
    """Print every field of one book in the current output mode."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
        return

    lines = [
        ("ID", book.id),
        ("Title", book.title),
        ("Author", book.author),
        ("Publisher", book.publisher),
        ("Publish date", book.publish_date),
        ("ISBN", book.isbn),
        ("Detail", book.detail or ""),
        ("Thumbnail", book.thumbnail_url or ""),
        ("Registered", book.reg_date or ""),
    ]
    if mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {value}" for label, value in lines)
        _console.print(Panel.fit(content, title="📖 Book", border_style="blue"))
    else:
        for label, value in lines:
            print(f"{label}: {value}")
