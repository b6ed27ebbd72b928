"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- Album / AlbumImage: photo albums and their images
- Article / ArticleImage: articles and their image galleries
- Blog, Resume, Book, Certificate: single-image content entries
- Video: linked YouTube videos
- Todo: to-do items
- Visitor: append-only visit log for analytics

All models inherit from the shared Base declarative class defined in data.db.
"""

from portfolio_cms.data.db import Base
from portfolio_cms.data.models.album import Album, AlbumImage
from portfolio_cms.data.models.article import Article, ArticleImage
from portfolio_cms.data.models.entries import Blog, Book, Certificate, Resume
from portfolio_cms.data.models.todo import Todo
from portfolio_cms.data.models.video import Video
from portfolio_cms.data.models.visitor import Visitor

__all__ = [
    "Album",
    "AlbumImage",
    "Article",
    "ArticleImage",
    "Base",
    "Blog",
    "Book",
    "Certificate",
    "Resume",
    "Todo",
    "Video",
    "Visitor",
]
