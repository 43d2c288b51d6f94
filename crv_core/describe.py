"""Multi-line tooltip text for each record kind."""

from __future__ import annotations

from uuid import UUID

from crv_core.guid_format import braced
from crv_core.models import (
    CategoryKey,
    ClassRecord,
    InterfaceRecord,
    Payload,
    PolicyRecord,
    ProgramIdRecord,
)


def describe_class(entry: ClassRecord) -> str:
    lines = [
        f"CLSID: {braced(entry.clsid)}",
        f"Name: {entry.name}",
        f"{entry.kind.value}: {entry.server}",
    ]
    if entry.server != entry.cmdline:
        lines.append(f"Command Line: {entry.cmdline}")
    if entry.progids:
        lines.append("ProgIDs:")
        lines.extend(entry.progids)
    if entry.appid is not None and entry.appid.int:
        lines.append(f"AppID: {braced(entry.appid)}")
    if entry.typelib is not None and entry.typelib.int:
        lines.append(f"TypeLib: {braced(entry.typelib)}")
    if entry.proxies:
        lines.append("Interface Proxies:")
        lines.extend(f"{proxy.iid} - {proxy.name}" for proxy in entry.proxies)
    return "\n".join(lines) + "\n"


def describe_progid(entry: ProgramIdRecord) -> str:
    if entry.entry is not None:
        return describe_class(entry.entry)
    if entry.clsid is not None:
        return f"CLSID: {braced(entry.clsid)}\n"
    return f"ProgID: {entry.progid}\n"


def describe_interface(entry: InterfaceRecord) -> str:
    lines = [f"Name: {entry.name}", f"IID: {braced(entry.iid)}"]
    if entry.proxy_clsid is not None and entry.proxy_clsid.int:
        lines.append(f"ProxyCLSID: {braced(entry.proxy_clsid)}")
    return "\n".join(lines) + "\n"


def describe(payload: Payload) -> str:
    """Return the tooltip text for a node payload; empty for no payload."""
    match payload:
        case ClassRecord():
            return describe_class(payload)
        case ProgramIdRecord():
            return describe_progid(payload)
        case InterfaceRecord():
            return describe_interface(payload)
        case CategoryKey(catid=catid):
            return f"CATID: {braced(catid)}"
        case PolicyRecord(policy=policy):
            return f"Elevation Policy: {policy}"
        case UUID():
            return f"GUID: {braced(payload)}"
        case None:
            return ""
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
