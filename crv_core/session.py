"""A view session: one activated view, its baseline and its visible forest."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from crv_common.errors import (
    FilterConfigurationError,
    ResolutionError,
    ResolutionInProgressError,
    SessionClosedError,
)
from crv_core.actions import NodeAction, available_actions, copy_text
from crv_core.describe import describe
from crv_core.filtering import MatchMode, compile_filter, filter_forest
from crv_core.guid_format import GuidStyle, format_guid
from crv_core.models import Forest, Payload, TreeNode
from crv_core.protocols import CategoryNames, InterfaceResolver, RecordStore
from crv_core.resolver import BranchResolver
from crv_core.views import ViewMode, build_view

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpandResult:
    """Outcome of expanding a node; ``error`` is set when the query failed."""

    node: TreeNode
    changed: bool = False
    error: ResolutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ViewSession:
    """Owns the baseline forest of an activated view.

    Filtering derives a new visible forest from the baseline and never
    mutates it. Expansion mutates individual nodes in place; those nodes are
    shared by the baseline and every visible forest derived from it.
    """

    def __init__(
        self,
        store: RecordStore,
        resolver: InterfaceResolver,
        categories: CategoryNames | None = None,
        mode: ViewMode | str = ViewMode.CLASSES,
    ) -> None:
        self._baseline = build_view(mode, store, categories)
        self._visible = self._baseline
        self._branches = BranchResolver(resolver)
        self._filter: tuple[str, MatchMode, bool] | None = None
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError(
                f"View {self._baseline.title!r} is closed",
                context={"mode": self._baseline.mode.value},
            )

    @property
    def mode(self) -> ViewMode:
        return self._baseline.mode

    @property
    def title(self) -> str:
        return self._baseline.title

    @property
    def baseline(self) -> Forest:
        self._ensure_open()
        return self._baseline

    @property
    def visible(self) -> Forest:
        self._ensure_open()
        return self._visible

    @property
    def filter_active(self) -> bool:
        return self._filter is not None

    @property
    def current_filter(self) -> tuple[str, MatchMode, bool] | None:
        return self._filter

    @property
    def closed(self) -> bool:
        return self._closed

    def set_filter(
        self,
        pattern: str,
        mode: MatchMode | int | str = MatchMode.CONTAINS,
        case_sensitive: bool = False,
    ) -> Forest:
        """Filter the baseline; a blank pattern clears the filter.

        On a configuration error the visible forest is left as it was.
        """
        self._ensure_open()
        pattern = pattern.strip()
        if not pattern:
            return self.clear_filter()
        try:
            match_mode = MatchMode.parse(mode)
            predicate = compile_filter(pattern, match_mode, case_sensitive)
        except FilterConfigurationError as exc:
            logger.info("Rejected filter %r: %s", pattern, exc)
            raise
        self._visible = filter_forest(self._baseline, predicate)
        self._filter = (pattern, match_mode, case_sensitive)
        return self._visible

    def clear_filter(self) -> Forest:
        self._ensure_open()
        self._visible = self._baseline
        self._filter = None
        return self._visible

    def expand_node(self, node: TreeNode, force_refresh: bool = False) -> ExpandResult:
        """Resolve ``node``'s interfaces, reporting query failures in the result.

        Fatal failures and re-entrant expansion still raise.
        """
        self._ensure_open()
        try:
            changed = self._branches.resolve(node, force_refresh)
        except ResolutionInProgressError:
            raise
        except ResolutionError as exc:
            return ExpandResult(node=node, error=exc)
        return ExpandResult(node=node, changed=changed)

    def refresh_node(self, node: TreeNode) -> ExpandResult:
        return self.expand_node(node, force_refresh=True)

    def actions_for(self, node: TreeNode) -> list[NodeAction]:
        return available_actions(node)

    def copy_text(self, node: TreeNode, style: GuidStyle | str = GuidStyle.STRING) -> str:
        return copy_text(node, style)

    def format_identifier(self, guid: UUID | str, style: GuidStyle | str = GuidStyle.STRING) -> str:
        return format_guid(guid, style)

    def describe(self, payload: Payload) -> str:
        return describe(payload)

    def close(self) -> None:
        """Discard the baseline; further use raises SessionClosedError."""
        self._closed = True
        self._baseline = self._baseline.with_roots(())
        self._visible = self._baseline
        logger.debug("Closed view %s", self.mode.value)


def open_view(
    mode: ViewMode | str,
    store: RecordStore,
    resolver: InterfaceResolver,
    categories: CategoryNames | None = None,
) -> ViewSession:
    return ViewSession(store, resolver, categories, mode)
