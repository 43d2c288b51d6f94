"""On-demand population of class nodes with their supported interfaces."""

from __future__ import annotations

import logging

from crv_common.errors import (
    InterfaceQueryError,
    ResolutionError,
    ResolutionFatalError,
    ResolutionInProgressError,
)
from crv_core.models import ResolutionState, TreeNode
from crv_core.protocols import InterfaceResolver
from crv_core.views import interface_name_node

logger = logging.getLogger(__name__)


class BranchResolver:
    """Resolves class-bearing nodes through an ``InterfaceResolver``.

    Node state moves UNRESOLVED -> RESOLVING -> RESOLVED, or to FAILED when
    the query fails. FAILED nodes keep their placeholder and resolve again
    on the next expansion. A node in RESOLVING rejects a second resolution.
    """

    def __init__(self, resolver: InterfaceResolver) -> None:
        self._resolver = resolver

    def resolve(self, node: TreeNode, force_refresh: bool = False) -> bool:
        """Populate ``node``'s children; return True if they were replaced."""
        entry = node.class_entry
        if entry is None:
            return False
        if node.state is ResolutionState.RESOLVING:
            raise ResolutionInProgressError(
                f"Resolution already in progress for {node.label}",
                context={"node": node.label, "clsid": entry.clsid},
            )
        if node.state is ResolutionState.RESOLVED and not force_refresh:
            return False

        previous = node.state
        node.state = ResolutionState.RESOLVING
        try:
            interfaces = self._resolver.supported_interfaces(entry, force_refresh)
        except InterfaceQueryError as exc:
            node.reset_placeholder()
            node.state = ResolutionState.FAILED
            logger.warning("Interface query failed for %s: %s", entry.clsid, exc)
            raise ResolutionError(
                f"Error querying COM interfaces\n{exc}",
                context={"node": node.label, "clsid": entry.clsid, **exc.context},
                cause=exc,
            ) from exc
        except Exception as exc:
            node.state = previous
            raise ResolutionFatalError(
                f"Unexpected failure resolving {node.label}: {exc}",
                context={"node": node.label, "clsid": entry.clsid},
                cause=exc,
            ) from exc

        node.children = [interface_name_node(item) for item in interfaces]
        node.state = ResolutionState.RESOLVED
        logger.debug("Resolved %d interfaces for %s", len(node.children), entry.clsid)
        return True
