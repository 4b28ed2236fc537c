"""
FastAPI app entrypoint.

Polls (create, vote, finalize) and scheduling previews (merge cells, preview slots).
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from plantomeet.api.routes import polls, scheduling  # noqa: E402
from plantomeet.config import settings  # noqa: E402
from plantomeet.core.errors import SchedulingError, scheduling_error_to_http  # noqa: E402

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the production web app
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8081",
    "http://127.0.0.1:8081",
]
_cors_origins.extend(settings.cors_origin_list())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    http_exc = scheduling_error_to_http(exc)
    logger.info("%s on %s -> %s: %s", type(exc).__name__, request.url.path, http_exc.status_code, exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


app.include_router(scheduling.router, prefix="/scheduling", tags=["scheduling"])
app.include_router(polls.router, prefix="/polls", tags=["polls"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": f"{settings.app_name} API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
