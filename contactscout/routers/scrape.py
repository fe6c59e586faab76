# contactscout/routers/scrape.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ..exceptions import JobNotFound, ValidationError
from ..services.jobs import JobEngine
from .deps import get_engine

LOG = logging.getLogger("contactscout.api")

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


# ---------------------------------------------------
# Start a scrape job
# ---------------------------------------------------
@router.post("/scrape")
async def create_scrape_job(
    request: Request,
    engine: JobEngine = Depends(get_engine),
):
    try:
        body = await request.json()
    except ValueError:
        return error_response(400, "Invalid JSON")

    # a JSON null body has no fields to look up
    if body is None:
        return error_response(400, "Invalid JSON")

    urls = body.get("urls") if isinstance(body, dict) else None
    try:
        job_id = engine.create(urls)
    except ValidationError as e:
        return error_response(400, str(e))

    return {"jobId": job_id}


# ---------------------------------------------------
# Status Route
# ---------------------------------------------------
@router.get("/status")
async def get_scrape_status(
    job_id: Optional[str] = Query(None, alias="jobId"),
    engine: JobEngine = Depends(get_engine),
):
    try:
        return engine.status(job_id)
    except JobNotFound:
        return error_response(404, "Job not found")
