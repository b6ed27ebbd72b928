"""Article models: a titled article with a thumbnail and a gallery of images."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_cms.data.db import Base, UTCDateTime


class Article(Base):
    """An article addressed by its unique title.

    Attributes:
        id: Auto-incrementing primary key.
        title: Unique article title.
        thumbnail: Stored filename in the ``articles`` category.
        date: UTC timestamp of creation.
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    thumbnail: Mapped[str] = mapped_column(String(512), nullable=False)
    date: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=lambda: datetime.now(UTC)
    )

    images: Mapped[list[ArticleImage]] = relationship(
        "ArticleImage",
        back_populates="article",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ArticleImage(Base):
    """An image attached to an article, stored in the ``articleimages`` category."""

    __tablename__ = "article_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    article_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    date: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=lambda: datetime.now(UTC)
    )

    article: Mapped[Article] = relationship("Article", back_populates="images")
