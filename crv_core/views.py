"""Projection of a record store into one of the ten view shapes."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Sequence

from crv_common.errors import ConfigurationError, CRVError, ViewBuildError
from crv_core.describe import describe
from crv_core.models import (
    CategoryKey,
    ClassRecord,
    Forest,
    InterfaceRecord,
    PolicyRecord,
    ProgramIdRecord,
    TreeNode,
)
from crv_core.protocols import CategoryNames, RecordStore
from crv_core.store import MappingCategoryNames

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    CLASSES = "classes"
    PROGRAM_IDS = "progids"
    CLASSES_BY_NAME = "classes-by-name"
    CLASSES_BY_SERVER = "classes-by-server"
    CLASSES_BY_LOCAL_SERVER = "classes-by-local-server"
    INTERFACES = "interfaces"
    INTERFACES_BY_NAME = "interfaces-by-name"
    IMPLEMENTED_CATEGORIES = "implemented-categories"
    PRE_APPROVED = "pre-approved"
    IE_LOW_RIGHTS = "ie-low-rights"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def parse(cls, value: "ViewMode | str") -> "ViewMode":
        """Accept a member, its value (``classes-by-name``) or its name."""
        if isinstance(value, cls):
            return value
        token = str(value).strip()
        for member in cls:
            if token.lower() == member.value or token.replace("-", "_").upper() == member.name:
                return member
        raise ConfigurationError(
            f"Unknown view mode: {value!r}",
            context={"mode": value, "choices": [m.value for m in cls]},
        )


_TITLES = {
    ViewMode.CLASSES: "CLSIDs",
    ViewMode.PROGRAM_IDS: "ProgIDs",
    ViewMode.CLASSES_BY_NAME: "CLSIDs by Name",
    ViewMode.CLASSES_BY_SERVER: "CLSIDs by Server",
    ViewMode.CLASSES_BY_LOCAL_SERVER: "CLSIDs by Local Server",
    ViewMode.INTERFACES: "Interfaces",
    ViewMode.INTERFACES_BY_NAME: "Interfaces by Name",
    ViewMode.IMPLEMENTED_CATEGORIES: "Implemented Categories",
    ViewMode.PRE_APPROVED: "Explorer PreApproved",
    ViewMode.IE_LOW_RIGHTS: "IE Low Rights Elevation Policy",
}


def class_node(entry: ClassRecord) -> TreeNode:
    """Class node labelled ``<clsid> - <name>`` with a placeholder child."""
    return TreeNode(
        label=f"{entry.clsid} - {entry.name}",
        tooltip=describe(entry),
        payload=entry,
        children=[TreeNode.placeholder()],
    )


def class_name_node(entry: ClassRecord) -> TreeNode:
    return TreeNode(
        label=entry.name,
        tooltip=describe(entry),
        payload=entry,
        children=[TreeNode.placeholder()],
    )


def progid_node(entry: ProgramIdRecord) -> TreeNode:
    node = TreeNode(label=entry.progid, tooltip=describe(entry), payload=entry)
    if entry.entry is not None:
        node.reset_placeholder()
    return node


def interface_node(entry: InterfaceRecord) -> TreeNode:
    return TreeNode(
        label=f"{entry.iid} - {entry.name}", tooltip=describe(entry), payload=entry
    )


def interface_name_node(entry: InterfaceRecord) -> TreeNode:
    return TreeNode(label=entry.name, tooltip=describe(entry), payload=entry)


def _roots(
    entries: Iterable, factory: Callable[..., TreeNode]
) -> list[TreeNode]:
    return [factory(entry) for entry in entries]


def _server_groups(store: RecordStore, local: bool) -> list[TreeNode]:
    groups = store.classes_by_server(local)
    roots: list[TreeNode] = []
    for path in sorted(groups):
        children = sorted(
            (class_name_node(entry) for entry in groups[path]),
            key=lambda node: node.label,
        )
        roots.append(TreeNode(label=path, tooltip=path, children=children))
    return roots


def _category_groups(store: RecordStore, categories: CategoryNames) -> list[TreeNode]:
    roots: list[TreeNode] = []
    for catid, entries in store.implemented_categories().items():
        key = CategoryKey(catid)
        roots.append(
            TreeNode(
                label=categories.name_of(catid),
                tooltip=describe(key),
                payload=key,
                children=[class_name_node(entry) for entry in sorted(entries)],
            )
        )
    roots.sort(key=lambda node: node.label)
    return roots


def _policy_group(policy: PolicyRecord) -> TreeNode:
    return TreeNode(
        label=policy.name,
        tooltip=describe(policy),
        payload=policy,
        children=[class_node(entry) for entry in policy.classes],
    )


def _build_roots(
    mode: ViewMode, store: RecordStore, categories: CategoryNames
) -> Sequence[TreeNode]:
    match mode:
        case ViewMode.CLASSES:
            return _roots(store.all_classes(), class_node)
        case ViewMode.PROGRAM_IDS:
            return _roots(store.all_progids(), progid_node)
        case ViewMode.CLASSES_BY_NAME:
            return _roots(store.classes_by_name(), class_name_node)
        case ViewMode.CLASSES_BY_SERVER:
            return _server_groups(store, local=False)
        case ViewMode.CLASSES_BY_LOCAL_SERVER:
            return _server_groups(store, local=True)
        case ViewMode.INTERFACES:
            return _roots(store.all_interfaces(), interface_node)
        case ViewMode.INTERFACES_BY_NAME:
            return _roots(store.interfaces_by_name(), interface_name_node)
        case ViewMode.IMPLEMENTED_CATEGORIES:
            return _category_groups(store, categories)
        case ViewMode.PRE_APPROVED:
            return _roots(store.pre_approved(), class_node)
        case ViewMode.IE_LOW_RIGHTS:
            return _roots(store.low_rights_policies(), _policy_group)
    raise ConfigurationError(f"Unhandled view mode: {mode}")


def build_view(
    mode: ViewMode | str,
    store: RecordStore,
    categories: CategoryNames | None = None,
) -> Forest:
    """Build a fresh forest for ``mode``.

    The result shares no nodes with earlier builds, so repeated calls against
    an unchanged store give structurally identical but independent forests.
    """
    mode = ViewMode.parse(mode)
    categories = categories or MappingCategoryNames()
    try:
        roots = tuple(_build_roots(mode, store, categories))
    except CRVError:
        raise
    except Exception as exc:
        raise ViewBuildError(
            f"Failed to build view {mode.title!r}: {exc}",
            context={"mode": mode.value},
            cause=exc,
        ) from exc
    logger.debug("Built view %s with %d roots", mode.value, len(roots))
    return Forest(title=mode.title, mode=mode, roots=roots)
