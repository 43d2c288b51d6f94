"""Fixtures for the CLI shell tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console

from crv_ui.cli import main

CATALOG = Path(__file__).resolve().parents[2] / "fixtures" / "catalog.yaml"


@pytest.fixture
def catalog_path() -> Path:
    return CATALOG


@pytest.fixture
def cli_app(monkeypatch):
    """The Typer app with a fresh context and logging setup disabled."""
    for name in ("CRV_CATALOG", "CRV_DEFAULT_VIEW", "CRV_MATCH_MODE", "CRV_GUID_STYLE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(main.ctx_store, "_settings", None)
    monkeypatch.setattr(main.ctx_store, "_console", Console(width=200, soft_wrap=True))
    monkeypatch.setattr(main.ctx_store, "_present", None)
    return main.app
