"""Catalog snapshots: a YAML/JSON description of a record store.

Snapshots feed the CLI shell and the tests. They describe records that were
already collected elsewhere; nothing here inspects a live registry.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import UUID

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from crv_common.errors import CatalogError
from crv_core.models import (
    ClassKind,
    ClassRecord,
    InterfaceRecord,
    PolicyRecord,
    ProgramIdRecord,
)
from crv_core.store import InMemoryRecordStore, MappingCategoryNames, StaticInterfaceResolver

logger = logging.getLogger(__name__)


class InterfaceEntry(BaseModel):
    iid: UUID
    name: str
    proxy_clsid: UUID | None = None


class ClassEntry(BaseModel):
    clsid: UUID
    name: str = ""
    kind: ClassKind = ClassKind.UNKNOWN
    server: str = ""
    cmdline: str | None = None
    progids: list[str] = Field(default_factory=list)
    appid: UUID | None = None
    typelib: UUID | None = None
    proxies: list[UUID] = Field(default_factory=list)
    interfaces: list[UUID] = Field(default_factory=list)
    categories: list[UUID] = Field(default_factory=list)
    pre_approved: bool = False


class ProgIdEntry(BaseModel):
    progid: str
    clsid: UUID | None = None


class CategoryEntry(BaseModel):
    catid: UUID
    name: str | None = None


class PolicyEntry(BaseModel):
    name: str
    policy: int = 0
    clsids: list[UUID] = Field(default_factory=list)


class CatalogDocument(BaseModel):
    """Validated snapshot document."""

    classes: list[ClassEntry] = Field(default_factory=list)
    interfaces: list[InterfaceEntry] = Field(default_factory=list)
    progids: list[ProgIdEntry] = Field(default_factory=list)
    categories: list[CategoryEntry] = Field(default_factory=list)
    policies: list[PolicyEntry] = Field(default_factory=list)
    failing: list[UUID] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "CatalogDocument":
        counts = Counter(entry.clsid for entry in self.classes)
        duplicates = [clsid for clsid, count in counts.items() if count > 1]
        if duplicates:
            raise ValueError(
                "duplicate class entries: " + ", ".join(str(clsid) for clsid in duplicates)
            )
        iids = {item.iid for item in self.interfaces}
        for entry in self.classes:
            missing = [iid for iid in [*entry.proxies, *entry.interfaces] if iid not in iids]
            if missing:
                raise ValueError(
                    f"class {entry.clsid} references unknown interfaces: "
                    + ", ".join(str(iid) for iid in missing)
                )
        return self


@dataclass(frozen=True)
class Catalog:
    """The three collaborators a view session needs."""

    store: InMemoryRecordStore
    resolver: StaticInterfaceResolver
    categories: MappingCategoryNames


def build_catalog(document: CatalogDocument) -> Catalog:
    interfaces = {
        item.iid: InterfaceRecord(iid=item.iid, name=item.name, proxy_clsid=item.proxy_clsid)
        for item in document.interfaces
    }
    classes: dict[UUID, ClassRecord] = {}
    for entry in document.classes:
        classes[entry.clsid] = ClassRecord(
            clsid=entry.clsid,
            name=entry.name,
            kind=entry.kind,
            server=entry.server,
            cmdline=entry.server if entry.cmdline is None else entry.cmdline,
            progids=tuple(entry.progids),
            appid=entry.appid,
            typelib=entry.typelib,
            proxies=tuple(interfaces[iid] for iid in entry.proxies),
        )

    progids = [
        ProgramIdRecord(
            progid=item.progid,
            clsid=item.clsid,
            entry=classes.get(item.clsid) if item.clsid is not None else None,
        )
        for item in document.progids
    ]

    category_members: dict[UUID, list[ClassRecord]] = {}
    for entry in document.classes:
        for catid in entry.categories:
            category_members.setdefault(catid, []).append(classes[entry.clsid])

    policies = [
        PolicyRecord(
            name=item.name,
            policy=item.policy,
            classes=tuple(classes[clsid] for clsid in item.clsids if clsid in classes),
        )
        for item in document.policies
    ]

    store = InMemoryRecordStore(
        classes=classes.values(),
        progids=progids,
        interfaces=interfaces.values(),
        categories=category_members,
        pre_approved=[classes[e.clsid] for e in document.classes if e.pre_approved],
        policies=policies,
    )
    resolver = StaticInterfaceResolver(
        {e.clsid: [interfaces[iid] for iid in e.interfaces] for e in document.classes},
        failures=document.failing,
    )
    names = MappingCategoryNames({c.catid: c.name for c in document.categories if c.name})
    return Catalog(store=store, resolver=resolver, categories=names)


def parse_catalog(data: Any, *, source: str = "<memory>") -> Catalog:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatalogError(
            "Catalog must contain a mapping at the top level.", context={"source": source}
        )
    try:
        document = CatalogDocument.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(
            f"Invalid catalog {source}: {exc}", context={"source": source}, cause=exc
        ) from exc
    return build_catalog(document)


def load_catalog(path: Path) -> Catalog:
    """Load a YAML (or JSON) catalog snapshot from ``path``."""
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}", context={"path": path})
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogError(
            f"Could not read catalog {path}: {exc}", context={"path": path}, cause=exc
        ) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogError(
            f"Could not parse catalog {path}: {exc}", context={"path": path}, cause=exc
        ) from exc
    catalog = parse_catalog(data, source=str(path))
    logger.debug("Loaded catalog %s with %d classes", path, len(catalog.store.all_classes()))
    return catalog
