"""filerelay application.

This is the main entry point for the filerelay service, a small HTTP
file-transfer server.

Endpoints:
    - GET  /ping: liveness probe
    - POST /task: echo a JSON task request
    - POST /upload: store the multipart file field ``afile``
    - GET  /download/{filename}: stream a stored file back
"""
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filerelay.config import get_config
from filerelay.files.router import router as files_router
from filerelay.files.service import FileStore
from filerelay.tasks.router import router as tasks_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config = get_config()

    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    store = FileStore.get_instance()
    logger.info(f"Serving files from {store.root}")

    yield  # Application runs here

    # Shutdown
    logger.info("Application shutdown complete")


app = FastAPI(
    title="filerelay",
    description="Minimal HTTP file-transfer service",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(tasks_router)
app.include_router(files_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log one line per request with status and duration."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        '"%s %s" %d in %.1fms',
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def plain_text_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Render every HTTP error as its raw message in a text body."""
    return PlainTextResponse(
        f"{exc.detail}\n",
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.get("/ping", response_class=PlainTextResponse)
async def ping() -> PlainTextResponse:
    """Liveness probe."""
    return PlainTextResponse("pong\n")


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    config = get_config()
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
