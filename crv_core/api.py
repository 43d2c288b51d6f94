"""Public API surface for crv_core."""

from crv_core.actions import NodeAction, available_actions, copy_text, guid_of, style_for
from crv_core.describe import describe
from crv_core.filtering import MatchMode, compile_filter, filter_forest, glob_to_regex
from crv_core.guid_format import GuidStyle, braced, format_guid, parse_guid
from crv_core.models import (
    PLACEHOLDER_LABEL,
    CategoryKey,
    ClassKind,
    ClassRecord,
    Forest,
    InterfaceRecord,
    Payload,
    PolicyRecord,
    ProgramIdRecord,
    ResolutionState,
    TreeNode,
)
from crv_core.protocols import CategoryNames, InterfaceResolver, RecordStore
from crv_core.resolver import BranchResolver
from crv_core.session import ExpandResult, ViewSession, open_view
from crv_core.settings import ViewerSettings
from crv_core.snapshot import Catalog, load_catalog, parse_catalog
from crv_core.store import InMemoryRecordStore, MappingCategoryNames, StaticInterfaceResolver
from crv_core.views import ViewMode, build_view

__all__ = [
    "PLACEHOLDER_LABEL",
    "BranchResolver",
    "Catalog",
    "CategoryKey",
    "CategoryNames",
    "ClassKind",
    "ClassRecord",
    "ExpandResult",
    "Forest",
    "GuidStyle",
    "InMemoryRecordStore",
    "InterfaceRecord",
    "InterfaceResolver",
    "MappingCategoryNames",
    "MatchMode",
    "NodeAction",
    "Payload",
    "PolicyRecord",
    "ProgramIdRecord",
    "RecordStore",
    "ResolutionState",
    "StaticInterfaceResolver",
    "TreeNode",
    "ViewMode",
    "ViewSession",
    "ViewerSettings",
    "available_actions",
    "braced",
    "build_view",
    "compile_filter",
    "copy_text",
    "describe",
    "filter_forest",
    "format_guid",
    "glob_to_regex",
    "guid_of",
    "load_catalog",
    "open_view",
    "parse_catalog",
    "parse_guid",
    "style_for",
]
