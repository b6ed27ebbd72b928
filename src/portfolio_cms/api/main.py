"""FastAPI application entry point for the portfolio CMS API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_cms.api.errors import register_exception_handlers
from portfolio_cms.api.routes import (
    albums,
    analytics,
    articles,
    entries,
    health,
    todos,
    uploads,
    videos,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from portfolio_cms.data.db import dispose_engine, init_db

    init_db()
    yield
    dispose_engine()


app = FastAPI(
    title="Portfolio CMS API",
    description="Albums, articles, blog, resume, books, certificates, videos, "
    "to-dos and visitor analytics for a personal site",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(uploads.router)
app.include_router(albums.router, prefix="/api")
app.include_router(albums.images_router, prefix="/api")
app.include_router(articles.router, prefix="/api")
app.include_router(entries.blogs_router, prefix="/api")
app.include_router(entries.resumes_router, prefix="/api")
app.include_router(entries.books_router, prefix="/api")
app.include_router(entries.certificates_router, prefix="/api")
app.include_router(videos.router, prefix="/api")
app.include_router(todos.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")
