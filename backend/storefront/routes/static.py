"""
Storefront Backend — Static File Routes
=========================================

What:  Serves the storefront frontend and product images.
How:   GET /               → <public_root>/index.html
       GET /images/{path}  → <images_root>/<path>, plain-text 404 when missing
       GET /{path}         → <public_root>/<path> (CSS, JS, icons)

The catch-all route must be the last router registered in main.py so it
never shadows an API route. Paths are resolved and must stay inside their
root directory.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Static"], include_in_schema=False)


def resolve_inside(root: str, relative: str) -> Optional[Path]:
    """
    Resolve `relative` under `root`.

    Returns:
        The absolute path of an existing regular file inside `root`, or None
        when the path escapes the root or does not exist.
    """
    base = Path(root).resolve()
    candidate = (base / relative).resolve()
    if not candidate.is_relative_to(base):
        logger.warning("Rejected path outside %s: %s", base, relative)
        return None
    if not candidate.is_file():
        return None
    return candidate


@router.get("/")
async def index_page() -> FileResponse:
    path = resolve_inside(settings.public_root, "index.html")
    if path is None:
        raise StarletteHTTPException(status_code=404)
    return FileResponse(path)


@router.get("/images/{file_path:path}", response_model=None)
async def serve_image(file_path: str):
    path = resolve_inside(settings.images_root, file_path)
    if path is None:
        return PlainTextResponse("Image not found!", status_code=404)
    return FileResponse(path, headers={"Cache-Control": "public, max-age=86400"})


@router.get("/{file_path:path}")
async def serve_public_file(file_path: str) -> FileResponse:
    path = resolve_inside(settings.public_root, file_path)
    if path is None:
        raise StarletteHTTPException(status_code=404)
    return FileResponse(path)
