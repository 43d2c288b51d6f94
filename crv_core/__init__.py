"""View building, lazy resolution and filtering over registration records."""

from crv_core.api import ViewMode, ViewSession, build_view, open_view

__all__ = ["ViewMode", "ViewSession", "build_view", "open_view"]
