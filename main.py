import logging
import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console

import database
from config import settings
from library import Library
from ui_helpers import print_book_details, print_list_result, set_output_mode

APP_NAME = "Library Catalog CLI"

console = Console()

app = typer.Typer(help=APP_NAME)


def get_library() -> Library:
    return Library(db_file=database.DATABASE_FILE)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Global CLI options (output mode, logging)."""
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)
    if output:
        set_output_mode(output)


@app.command("init-db")
def cli_init_db():
    """Create the books table if it does not exist."""
    database.initialize_database(database.DATABASE_FILE)
    print(f"Database initialized: {database.DATABASE_FILE}")


@app.command("list")
def cli_list():
    """List all books ordered by title."""
    result = get_library().list_books()
    if result.failed:
        print("Book data could not be loaded.")
        raise typer.Exit(code=1)
    print_list_result(result.books)


@app.command("show")
def cli_show(book_id: int = typer.Argument(..., help="Book ID")):
    """Show every field of one book."""
    try:
        book = get_library().get_book(book_id)
    except database.NotFoundError:
        print(f"Book with ID {book_id} not found.")
        raise typer.Exit(code=1)
    print_book_details(book)


@app.command("latest")
def cli_latest():
    """Show the most recently registered book."""
    try:
        book = get_library().get_latest_book()
    except database.NotFoundError:
        print("No books in library.")
        raise typer.Exit(code=1)
    print_book_details(book)


@app.command("remove")
def cli_remove(book_id: int = typer.Argument(..., help="Book ID")):
    """Delete a book by ID. Removing a missing ID is not an error."""
    get_library().delete_book(book_id)
    print(f"Book with ID {book_id} has been removed.")


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the web UI with uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    url = f"http://{host}:{port}/home"
    console.print(f"[green]Starting web UI on [link={url}]{url}[/link][/]")

    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        args.append("--reload")
    try:
        subprocess.run(args)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] `uvicorn` could not be started. Make sure it is installed.")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
