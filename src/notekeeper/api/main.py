import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from notekeeper.core.config import get_settings
from notekeeper.core.logging import configure_logging
from notekeeper.api.errors import register_exception_handlers
from notekeeper.db.session import dispose_engine
from notekeeper.api.routers import (
    health,
    auth,
    notes,
)

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("notekeeper starting", extra={"environment": settings.environment})
    yield
    # release pooled database connections on shutdown
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    description="Short text notes with per-note ownership and a 24-hour edit window.",
    lifespan=lifespan,
)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

def _include(router):
    app.include_router(router, prefix=settings.api_prefix)

_include(health.router)
_include(auth.router)
_include(notes.router)

@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "ok"}
