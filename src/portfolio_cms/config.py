"""Process-wide configuration.

All settings are read from environment variables (a ``.env`` file in the
working directory is loaded first) and frozen into a single ``Settings``
instance the first time ``get_settings`` is called.

Environment variables:
- DB_URL: SQLAlchemy database URL (default: sqlite file in the project root)
- PORTFOLIO_CMS_UPLOAD_DIR: root directory for uploaded attachments
- PORTFOLIO_CMS_FALLBACK_COUNTRY: country label used when geolocation fails
- PORTFOLIO_CMS_GEOIP_URL: lookup URL template with an ``{ip}`` placeholder
- PORTFOLIO_CMS_GEOIP_TIMEOUT: lookup timeout in seconds
- PORTFOLIO_CMS_LOOPBACK_IP: address substituted for loopback callers
- PORTFOLIO_CMS_ORPHAN_MIN_AGE: minimum age (seconds) before an unreferenced
  upload is swept
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from dotenv import load_dotenv
from sqlalchemy.engine import URL

NAMING_ORIGINAL = "original"
NAMING_RANDOM = "random"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")

DEFAULT_FALLBACK_COUNTRY = "Unknown"
DEFAULT_GEOIP_URL = "https://ipapi.co/{ip}/json/"
DEFAULT_GEOIP_TIMEOUT = 3.0
DEFAULT_ORPHAN_MIN_AGE = 3600.0


@dataclass(frozen=True)
class CategoryConfig:
    """Storage rules for one attachment category.

    Attributes:
        directory: Directory name under the upload root.
        allowed_extensions: Lower-case extensions accepted, or None for any.
        naming: ``original`` keeps the uploaded basename after a timestamp,
            ``random`` keeps only its extension.
    """

    directory: str
    allowed_extensions: tuple[str, ...] | None = None
    naming: str = NAMING_ORIGINAL


def _default_categories() -> Mapping[str, CategoryConfig]:
    return MappingProxyType(
        {
            "albums": CategoryConfig("albums"),
            "blogs": CategoryConfig("blogs"),
            "resumes": CategoryConfig("resumes"),
            "books": CategoryConfig("books"),
            "certificates": CategoryConfig(
                "certificates",
                allowed_extensions=IMAGE_EXTENSIONS,
                naming=NAMING_RANDOM,
            ),
            "articles": CategoryConfig("articles"),
            "articleimages": CategoryConfig("articleimages"),
        }
    )


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""

    database_url: str
    upload_root: Path
    categories: Mapping[str, CategoryConfig] = field(default_factory=_default_categories)
    fallback_country: str = DEFAULT_FALLBACK_COUNTRY
    geoip_url: str = DEFAULT_GEOIP_URL
    geoip_timeout: float = DEFAULT_GEOIP_TIMEOUT
    loopback_placeholder_ip: str | None = None
    orphan_min_age: float = DEFAULT_ORPHAN_MIN_AGE


_settings: Settings | None = None


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def get_database_url() -> str:
    """Return the database URL, allowing overrides via environment variable."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    db_path = _project_root() / "portfolio.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def get_upload_root() -> Path:
    """Return the root directory for uploaded attachments."""
    env_root = os.getenv("PORTFOLIO_CMS_UPLOAD_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return _project_root() / "uploads"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_settings() -> Settings:
    """Build a fresh ``Settings`` from the environment."""
    load_dotenv()
    return Settings(
        database_url=get_database_url(),
        upload_root=get_upload_root(),
        fallback_country=os.getenv("PORTFOLIO_CMS_FALLBACK_COUNTRY") or DEFAULT_FALLBACK_COUNTRY,
        geoip_url=os.getenv("PORTFOLIO_CMS_GEOIP_URL") or DEFAULT_GEOIP_URL,
        geoip_timeout=_float_env("PORTFOLIO_CMS_GEOIP_TIMEOUT", DEFAULT_GEOIP_TIMEOUT),
        loopback_placeholder_ip=os.getenv("PORTFOLIO_CMS_LOOPBACK_IP") or None,
        orphan_min_age=_float_env("PORTFOLIO_CMS_ORPHAN_MIN_AGE", DEFAULT_ORPHAN_MIN_AGE),
    )


def get_settings() -> Settings:
    """Return the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None
