"""QThread worker resolving a node's interfaces off the GUI thread."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread, Signal

if TYPE_CHECKING:
    from crv_core.api import TreeNode, ViewSession


class ExpandWorkerSignals(QObject):
    """Signals emitted by ExpandWorker."""

    finished = Signal(object)  # ExpandResult
    failed = Signal(object, str)  # TreeNode, message


class ExpandWorker(QObject):
    """Worker that expands a single node in a separate thread."""

    def __init__(
        self,
        session: "ViewSession",
        node: "TreeNode",
        force_refresh: bool = False,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._node = node
        self._force_refresh = force_refresh
        self._thread: QThread | None = None

        self.signals = ExpandWorkerSignals()

    @property
    def node(self) -> "TreeNode":
        return self._node

    def start(self) -> None:
        """Start the worker in a new thread."""
        if self._thread is not None:
            return
        self._thread = QThread()
        self.moveToThread(self._thread)
        self._thread.started.connect(self.run)
        self._thread.start()

    def run(self) -> None:
        """Expand the node; ``start`` calls this on the worker thread."""
        try:
            result = self._session.expand_node(self._node, self._force_refresh)
            self.signals.finished.emit(result)
        except Exception as exc:
            self.signals.failed.emit(self._node, str(exc))
        finally:
            self._cleanup_thread()

    def _cleanup_thread(self) -> None:
        if self._thread is not None:
            self._thread.quit()
            self._thread.deleteLater()
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.isRunning()
