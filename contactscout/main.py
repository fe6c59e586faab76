import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging_config import setup_logging
from .routers import scrape, static
from .routers.deps import get_engine
from .services.jobs import JobEngine

LOG = logging.getLogger("contactscout.api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(engine_factory: Optional[Callable[[], JobEngine]] = None) -> FastAPI:
    factory = engine_factory or JobEngine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        app.state.engine = factory()
        LOG.info("Starting %s server on http://%s:%s", settings.APP_NAME, settings.HOST, settings.PORT)
        try:
            yield
        finally:
            await app.state.engine.shutdown()
            LOG.info("%s shutdown", settings.APP_NAME)

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

    # ---------------------------------------------------
    # CORS: every response is open to any origin,
    # preflight (any OPTIONS) is answered here with 204
    # ---------------------------------------------------
    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        try:
            response = await call_next(request)
        except Exception:
            LOG.exception("Unhandled error on %s %s", request.method, request.url.path)
            return PlainTextResponse("Internal Server Error", status_code=500, headers=CORS_HEADERS)
        response.headers.update(CORS_HEADERS)
        return response

    # unknown routes and wrong methods both get a bare 404
    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    # ---------------------------------------------------
    # Health check
    # ---------------------------------------------------
    @app.get("/health", tags=["health"])
    async def health(request: Request):
        return {"status": "ok", "jobs": len(get_engine(request))}

    # ---------------------------------------------------
    # Routers
    # ---------------------------------------------------
    app.include_router(scrape.router, tags=["scrape"])
    app.include_router(static.router, tags=["static"])

    return app


app = create_app()
