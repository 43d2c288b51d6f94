"""Textual renderings of GUIDs for export."""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from crv_common.errors import ConfigurationError


class GuidStyle(str, Enum):
    STRING = "string"
    HEX = "hex"
    OBJECT_TAG = "object"
    STRUCTURE = "structure"


def braced(guid: UUID) -> str:
    """Return ``{XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX}`` in upper case."""
    return "{" + str(guid).upper() + "}"


def _structure(guid: UUID) -> str:
    data = guid.bytes
    head = f"{{ 0x{guid.time_low:08X}, 0x{guid.time_mid:04X}, 0x{guid.time_hi_version:04X}, {{ "
    tail = "".join(f"0x{byte:02X}, " for byte in data[8:])
    return head + tail + "} };"


def parse_guid(value: str | UUID) -> UUID:
    """Parse braced, hyphenated or 32-digit hex GUID text."""
    if isinstance(value, UUID):
        return value
    text = value.strip()
    try:
        return UUID(text)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid GUID: {value!r}", context={"value": value}, cause=exc
        ) from exc


def format_guid(guid: str | UUID, style: GuidStyle | str = GuidStyle.STRING) -> str:
    """Render ``guid`` in the requested export style.

    The hex form is the big-endian digest of the braced form, so both read
    the same digits in the same order.
    """
    guid = parse_guid(guid)
    try:
        style = GuidStyle(style)
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown GUID style: {style!r}", context={"style": style}, cause=exc
        ) from exc

    match style:
        case GuidStyle.STRING:
            return braced(guid)
        case GuidStyle.HEX:
            return guid.hex.upper()
        case GuidStyle.OBJECT_TAG:
            return f'<object id="obj" classid="clsid:{guid}">NO OBJECT</object>'
        case GuidStyle.STRUCTURE:
            return _structure(guid)
    raise ConfigurationError(f"Unhandled GUID style: {style}")
