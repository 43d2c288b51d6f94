"""Public API surface for crv_ui."""

from crv_ui.context import UIContext
from crv_ui.presenter import RichPresenter
from crv_ui.render import forest_tree

__all__ = ["RichPresenter", "UIContext", "forest_tree"]
