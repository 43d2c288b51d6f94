"""Lazily constructed services shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from crv_common.errors import ConfigurationError
from crv_core.api import Catalog, ViewerSettings, load_catalog
from crv_ui.presenter import RichPresenter


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    debug: bool = False

    _console: Optional[Console] = None
    _present: Optional[RichPresenter] = None
    _settings: Optional[ViewerSettings] = None

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console(soft_wrap=True)
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value
        self._present = None

    @property
    def present(self) -> RichPresenter:
        if self._present is None:
            self._present = RichPresenter(self.console)
        return self._present

    @property
    def settings(self) -> ViewerSettings:
        if self._settings is None:
            self._settings = ViewerSettings.from_env()
        return self._settings

    @settings.setter
    def settings(self, value: ViewerSettings) -> None:
        self._settings = value

    def load_catalog(self, path: Path | None) -> Catalog:
        resolved = path or self.settings.catalog_path
        if resolved is None:
            raise ConfigurationError(
                "No catalog given; pass a path or set CRV_CATALOG."
            )
        return load_catalog(resolved)
