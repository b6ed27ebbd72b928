"""Photo album models.

Albums are addressed by their unique name at the API boundary; images point
at their album through the generated ``album_id``.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_cms.data.db import Base, UTCDateTime


class Album(Base):
    """A named photo album with a thumbnail image.

    Attributes:
        id: Auto-incrementing primary key.
        name: Unique album name.
        thumbnail: Stored filename of the thumbnail in the ``albums`` category.
        date: UTC timestamp of creation.
    """

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    thumbnail: Mapped[str] = mapped_column(String(512), nullable=False)
    date: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=lambda: datetime.now(UTC)
    )

    images: Mapped[list[AlbumImage]] = relationship(
        "AlbumImage", back_populates="album", cascade="all, delete-orphan", passive_deletes=True
    )


class AlbumImage(Base):
    """An image stored in an album.

    Attributes:
        id: Auto-incrementing primary key.
        album_id: Foreign key to albums table.
        filename: Stored filename in the ``albums`` category.
        date: UTC timestamp of upload.
    """

    __tablename__ = "album_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    album_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    date: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=lambda: datetime.now(UTC)
    )

    album: Mapped[Album] = relationship("Album", back_populates="images")
