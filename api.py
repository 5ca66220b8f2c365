import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

import database
import handlers
from config import settings
from library import Library
from thumbnails import ThumbnailStorage

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


# --- Dependencies ---
# Both collaborators are stateless; tests swap them via app.dependency_overrides.
@lru_cache(maxsize=1)
def get_library() -> Library:
    return Library(db_file=settings.database_file)


@lru_cache(maxsize=1)
def get_thumbnail_storage() -> ThumbnailStorage:
    return ThumbnailStorage()


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.initialize_database(settings.database_file)
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield


app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug, lifespan=lifespan)


@app.middleware("http")
async def add_headers(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/thumbnails/"):
        response.headers["Cache-Control"] = "public, max-age=86400"  # 24 hours
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


def render(request: Request, view: handlers.View) -> HTMLResponse:
    return templates.TemplateResponse(request, view.template, view.context)


# --- Screens ---
@app.get("/")
def index():
    return RedirectResponse(url="/home")


@app.get("/home", response_class=HTMLResponse)
def home(request: Request, library: Library = Depends(get_library)):
    return render(request, handlers.home(library))


@app.get("/addBook", response_class=HTMLResponse)
def add_book(request: Request):
    return render(request, handlers.add_book_form())


@app.post("/insertBook", response_class=HTMLResponse)
def insert_book(
    request: Request,
    title: str = Form(""),
    author: str = Form(""),
    publisher: str = Form(""),
    publishDate: str = Form(""),
    isbn: str = Form(""),
    detail: str = Form(""),
    thumbnail: Optional[UploadFile] = File(None),
    library: Library = Depends(get_library),
    storage: ThumbnailStorage = Depends(get_thumbnail_storage),
):
    logger.info("insertBook: %r", title)
    book = handlers.book_from_form(title, author, publisher, publishDate, isbn, detail)

    filename, data = None, None
    if thumbnail is not None and thumbnail.filename:
        filename = thumbnail.filename
        data = thumbnail.file.read()

    view = handlers.insert_book(book, library, storage, thumbnail_filename=filename, thumbnail_data=data)
    return render(request, view)


@app.get("/details", response_class=HTMLResponse)
def details(request: Request, bookId: int = Query(...), library: Library = Depends(get_library)):
    return render(request, handlers.book_details(bookId, library))


@app.post("/deleteBook", response_class=HTMLResponse)
def delete_book(request: Request, bookId: int = Form(...), library: Library = Depends(get_library)):
    logger.info("deleteBook: %s", bookId)
    return render(request, handlers.delete_book(bookId, library))


# --- Thumbnails ---
@app.get("/thumbnails/{key}")
def thumbnail(key: str, storage: ThumbnailStorage = Depends(get_thumbnail_storage)):
    """Serve a stored thumbnail by its storage key."""
    if Path(key).name != key:
        raise HTTPException(status_code=404, detail="Thumbnail not found.")
    path = storage.path_for(key)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Thumbnail not found.")
    return FileResponse(path)


# --- Health Check ---
@app.get("/health")
def health():
    """Lightweight health endpoint for process monitors."""
    return {"status": "ok", "database": database.ping(settings.database_file)}
