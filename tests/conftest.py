from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from portfolio_cms.config import Settings, get_settings, reset_settings
from portfolio_cms.data.db import dispose_engine, init_db
from portfolio_cms.storage.attachments import reset_attachment_store


@pytest.fixture
def cms_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Settings]:
    """Point the database and upload root at a temporary directory."""
    db_path = tmp_path / "cms.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("PORTFOLIO_CMS_UPLOAD_DIR", (tmp_path / "uploads").as_posix())
    monkeypatch.setenv("PORTFOLIO_CMS_FALLBACK_COUNTRY", "Unknown")
    monkeypatch.delenv("PORTFOLIO_CMS_LOOPBACK_IP", raising=False)
    monkeypatch.delenv("PORTFOLIO_CMS_GEOIP_URL", raising=False)
    reset_settings()
    reset_attachment_store()
    dispose_engine()
    init_db()
    yield get_settings()
    # Dispose engine to release connections
    dispose_engine()
    reset_attachment_store()
    reset_settings()


@pytest.fixture
def upload_root(cms_env: Settings) -> Path:
    return cms_env.upload_root


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Automatically add the cms_env fixture to tests in API test files."""
    for item in items:
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            item.add_marker(pytest.mark.usefixtures("cms_env"))
