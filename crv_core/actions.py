"""Per-node actions offered to the presentation layer."""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from crv_common.errors import ConfigurationError
from crv_core.guid_format import GuidStyle, format_guid
from crv_core.models import (
    CategoryKey,
    ClassRecord,
    InterfaceRecord,
    Payload,
    PolicyRecord,
    ProgramIdRecord,
    TreeNode,
)


class NodeAction(str, Enum):
    COPY_GUID = "copy-guid"
    COPY_GUID_HEX = "copy-guid-hex"
    COPY_GUID_STRUCTURE = "copy-guid-structure"
    COPY_OBJECT_TAG = "copy-object-tag"
    REFRESH_INTERFACES = "refresh-interfaces"


_COPY_STYLES = {
    NodeAction.COPY_GUID: GuidStyle.STRING,
    NodeAction.COPY_GUID_HEX: GuidStyle.HEX,
    NodeAction.COPY_GUID_STRUCTURE: GuidStyle.STRUCTURE,
    NodeAction.COPY_OBJECT_TAG: GuidStyle.OBJECT_TAG,
}


def guid_of(payload: Payload) -> UUID | None:
    """Return the identifier a payload exports; the nil GUID counts as none."""
    guid: UUID | None
    match payload:
        case ClassRecord(clsid=clsid):
            guid = clsid
        case InterfaceRecord(iid=iid):
            guid = iid
        case ProgramIdRecord(entry=entry):
            guid = entry.clsid if entry is not None else None
        case CategoryKey(catid=catid):
            guid = catid
        case UUID():
            guid = payload
        case PolicyRecord() | None:
            guid = None
        case _:
            raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
    if guid is None or guid.int == 0:
        return None
    return guid


def _is_class_bearing(payload: Payload) -> bool:
    return isinstance(payload, (ClassRecord, ProgramIdRecord))


def available_actions(node: TreeNode) -> list[NodeAction]:
    if guid_of(node.payload) is None:
        return []
    actions = [
        NodeAction.COPY_GUID,
        NodeAction.COPY_GUID_HEX,
        NodeAction.COPY_GUID_STRUCTURE,
    ]
    if _is_class_bearing(node.payload):
        actions += [NodeAction.COPY_OBJECT_TAG, NodeAction.REFRESH_INTERFACES]
    return actions


def copy_text(node: TreeNode, style: GuidStyle | str = GuidStyle.STRING) -> str:
    """Text to export for ``node`` in ``style``.

    Raises ConfigurationError when the node has no identifier, or when an
    object tag is requested for something that is not a class.
    """
    style = GuidStyle(style)
    if style is GuidStyle.OBJECT_TAG and not _is_class_bearing(node.payload):
        raise ConfigurationError(
            "Object tags are only available for classes",
            context={"node": node.label},
        )
    guid = guid_of(node.payload)
    if guid is None:
        raise ConfigurationError(
            f"No identifier to copy for {node.label!r}", context={"node": node.label}
        )
    return format_guid(guid, style)


def style_for(action: NodeAction) -> GuidStyle | None:
    """The export style behind a copy action, None for non-copy actions."""
    return _COPY_STYLES.get(action)
