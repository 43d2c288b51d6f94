"""ViewModel for the registry tree view."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from crv_common.errors import ConfigurationError, CRVError
from crv_core.api import (
    GuidStyle,
    MatchMode,
    NodeAction,
    ViewMode,
    ViewSession,
    open_view,
    style_for,
)
from crv_gui.workers import ExpandWorker

if TYPE_CHECKING:
    from crv_core.api import (
        CategoryNames,
        ExpandResult,
        Forest,
        InterfaceResolver,
        RecordStore,
        TreeNode,
    )

logger = logging.getLogger(__name__)


class RegistryViewModel(QObject):
    """ViewModel for one registry view tab.

    Owns the view session; the view only renders the forests it is handed.
    """

    # Signals
    forest_changed = Signal(object)  # Forest
    node_expanded = Signal(object)  # TreeNode
    busy_changed = Signal(bool)
    error_occurred = Signal(str)
    text_copied = Signal(str)

    # Filter modes in combo-box order
    MATCH_MODE_LABELS = ["Contains", "Starts With", "Ends With", "Equals", "Glob", "Regex"]

    def __init__(
        self,
        store: "RecordStore",
        resolver: "InterfaceResolver",
        categories: "CategoryNames | None" = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._resolver = resolver
        self._categories = categories

        # State
        self._session: ViewSession | None = None
        self._workers: dict[int, ExpandWorker] = {}

    @property
    def session(self) -> ViewSession | None:
        return self._session

    @property
    def title(self) -> str:
        return self._session.title if self._session else ""

    @property
    def visible(self) -> "Forest | None":
        return self._session.visible if self._session else None

    @property
    def is_busy(self) -> bool:
        return bool(self._workers)

    def open_view(self, mode: ViewMode | str) -> bool:
        """Build the view for ``mode``, replacing any open one."""
        self.close_view()
        try:
            self._session = open_view(mode, self._store, self._resolver, self._categories)
        except CRVError as exc:
            self.error_occurred.emit(str(exc))
            return False
        self.forest_changed.emit(self._session.visible)
        return True

    def close_view(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def apply_filter(
        self, text: str, mode_index: int = MatchMode.CONTAINS, case_sensitive: bool = False
    ) -> bool:
        """Filter the current view; returns False if the filter was rejected."""
        if self._session is None:
            return False
        try:
            forest = self._session.set_filter(text, mode_index, case_sensitive)
        except ConfigurationError as exc:
            self.error_occurred.emit(str(exc))
            return False
        self.forest_changed.emit(forest)
        return True

    def clear_filter(self) -> None:
        if self._session is None:
            return
        self.forest_changed.emit(self._session.clear_filter())

    def expand_node(
        self, node: "TreeNode", force_refresh: bool = False, blocking: bool = False
    ) -> bool:
        """Resolve ``node``'s interfaces.

        Runs on a worker thread unless ``blocking``. Returns False when the
        node is already being expanded or no view is open.
        """
        if self._session is None or id(node) in self._workers:
            return False
        if node.class_entry is None:
            return False

        worker = ExpandWorker(self._session, node, force_refresh)
        worker.signals.finished.connect(self._on_expand_finished)
        worker.signals.failed.connect(self._on_expand_failed)
        self._workers[id(node)] = worker
        if len(self._workers) == 1:
            self.busy_changed.emit(True)
        if blocking:
            worker.run()
        else:
            worker.start()
        return True

    def refresh_interfaces(self, node: "TreeNode", blocking: bool = False) -> bool:
        return self.expand_node(node, force_refresh=True, blocking=blocking)

    def _release(self, node: "TreeNode") -> None:
        self._workers.pop(id(node), None)
        if not self._workers:
            self.busy_changed.emit(False)

    def _on_expand_finished(self, result: "ExpandResult") -> None:
        self._release(result.node)
        if result.error is not None:
            self.error_occurred.emit(str(result.error))
            return
        self.node_expanded.emit(result.node)

    def _on_expand_failed(self, node: "TreeNode", message: str) -> None:
        self._release(node)
        logger.error("Expansion of %s failed: %s", node.label, message)
        self.error_occurred.emit(message)

    def actions_for(self, node: "TreeNode") -> list[NodeAction]:
        if self._session is None:
            return []
        return self._session.actions_for(node)

    def copy_text(self, node: "TreeNode", style: GuidStyle | str) -> str | None:
        """Text for the clipboard, or None after reporting why not."""
        if self._session is None:
            return None
        try:
            return self._session.copy_text(node, style)
        except ConfigurationError as exc:
            self.error_occurred.emit(str(exc))
            return None

    def trigger_action(
        self, node: "TreeNode", action: NodeAction | str, blocking: bool = False
    ) -> bool:
        """Run a context-menu action; copy actions emit ``text_copied``."""
        action = NodeAction(action)
        if action not in self.actions_for(node):
            self.error_occurred.emit(f"{action.value} is not available for {node.label}")
            return False
        if action is NodeAction.REFRESH_INTERFACES:
            return self.refresh_interfaces(node, blocking=blocking)
        text = self.copy_text(node, style_for(action))
        if text is None:
            return False
        self.text_copied.emit(text)
        return True
