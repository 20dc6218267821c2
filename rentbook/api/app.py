"""Rentbook FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentbook.api import notices, records, tenants
from rentbook.api.errors import register_error_handlers
from rentbook.config import get_settings
from rentbook.models import Base
from rentbook.services import engine

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.api_title,
    description="Tenants, monthly rent tracking and a notice board",
    version=settings.api_version,
    lifespan=lifespan,
)

# Browser client is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(tenants.router)
app.include_router(notices.router)
app.include_router(records.router)


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok"}


__all__ = ["app"]
