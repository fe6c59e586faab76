# contactscout/routers/static.py
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse

from ..config import settings

router = APIRouter()

# path -> (file name, media type, message when missing)
ASSETS = {
    "/": ("index.html", "text/html", "Frontend files not found"),
    "/style.css": ("style.css", "text/css", "CSS file not found"),
    "/script.js": ("script.js", "application/javascript", "JavaScript file not found"),
}


def _serve(route: str):
    filename, media_type, missing = ASSETS[route]
    path = Path(settings.STATIC_DIR) / filename
    if not path.is_file():
        return PlainTextResponse(missing, status_code=404)
    return FileResponse(path, media_type=media_type)


@router.get("/", include_in_schema=False)
async def index():
    return _serve("/")


@router.get("/style.css", include_in_schema=False)
async def stylesheet():
    return _serve("/style.css")


@router.get("/script.js", include_in_schema=False)
async def script():
    return _serve("/script.js")
