"""Route handlers for the API."""

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

__all__ = [
    "albums",
    "analytics",
    "articles",
    "entries",
    "health",
    "todos",
    "uploads",
    "videos",
]
