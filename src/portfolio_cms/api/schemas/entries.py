"""Pydantic schemas for blog, resume, book and certificate endpoints."""

from __future__ import annotations

from datetime import datetime

from portfolio_cms.api.schemas.common import CamelModel


class BlogResponse(CamelModel):
    """A blog post with its cover image."""

    id: int
    title: str
    description: str
    image: str
    created_at: datetime


class ResumeResponse(CamelModel):
    """A resume page image with its heading."""

    id: int
    heading: str
    image: str
    created_at: datetime


class BookResponse(CamelModel):
    """A book with its cover image and external link."""

    id: int
    name: str
    link: str
    image: str
    created_at: datetime


class CertificateResponse(CamelModel):
    """A certificate image with its title."""

    id: int
    title: str
    image: str
    created_at: datetime
