"""QThread workers for async operations."""

from crv_gui.workers.expand_worker import ExpandWorker, ExpandWorkerSignals

__all__ = ["ExpandWorker", "ExpandWorkerSignals"]
