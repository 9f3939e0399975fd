"""
nomadlife.api.main — FastAPI application entry point
======================================================

Run locally with::

    uvicorn nomadlife.api.main:app --reload --port 8000

On a serverless host, point the function at ``nomadlife.api.main.handler``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

load_dotenv()

from nomadlife.api.deps import get_backend, get_config  # noqa: E402
from nomadlife.api.responses import CORS_HEADERS, install_error_handlers  # noqa: E402
from nomadlife.api.routes.blog import router as blog_router  # noqa: E402
from nomadlife.api.routes.events import router as events_router  # noqa: E402
from nomadlife.api.routes.player_mappings import router as mappings_router  # noqa: E402
from nomadlife.api.routes.stats import router as stats_router  # noqa: E402
from nomadlife.api.routes.teams import router as teams_router  # noqa: E402
from nomadlife.api.routes.token import router as token_router  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — build config and storage once."""
    cfg = get_config()
    backend = get_backend()
    if not cfg.admin_token:
        logger.warning("ADMIN_TOKEN is not set; admin writes will fail")
    if not cfg.bot_secret:
        logger.warning("BOT_SECRET is not set; bot writes will fail")
    logger.info("NomadLife API started — storage: %s", backend.name)
    yield
    logger.info("NomadLife API shutting down")


app = FastAPI(
    title="NomadLife API",
    version="1.0.0",
    lifespan=lifespan,
)

# Public site, public API: every origin may read
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def options_short_circuit(request: Request, call_next):
    """Answer every OPTIONS request with 200 and an empty body."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    return await call_next(request)


install_error_handlers(app)

# Mount routers
app.include_router(blog_router, prefix="/api")
app.include_router(events_router, prefix="/api")
app.include_router(teams_router, prefix="/api")
app.include_router(mappings_router, prefix="/api")
app.include_router(stats_router, prefix="/api")
app.include_router(token_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"success": True, "status": "ok"}


# Mangum adapts the ASGI app for serverless HTTP functions.
handler = Mangum(app, lifespan="off")
