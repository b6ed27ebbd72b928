"""Tests for the command-line entry point."""

from __future__ import annotations

import os
import time

import pytest

from portfolio_cms.cli import main
from portfolio_cms.config import Settings


def test_sweep_without_orphans(cms_env: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["sweep-orphans"]) == 0
    assert "No orphaned files found." in capsys.readouterr().out


def test_sweep_reports_removed_files(
    cms_env: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    books = cms_env.upload_root / "books"
    books.mkdir(parents=True)
    stray = books / "1-stray.png"
    stray.write_bytes(b"x")
    old = time.time() - 10
    os.utime(stray, (old, old))

    assert main(["sweep-orphans", "--min-age", "5"]) == 0

    assert "removed books/1-stray.png" in capsys.readouterr().out
    assert not stray.exists()


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        main([])
