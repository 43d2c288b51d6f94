"""In-memory collaborators backing the CLI shell and the tests."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Sequence
from uuid import UUID

from crv_common.errors import InterfaceQueryError
from crv_core.guid_format import braced
from crv_core.models import ClassRecord, InterfaceRecord, PolicyRecord, ProgramIdRecord

logger = logging.getLogger(__name__)


class InMemoryRecordStore:
    """Record store over plain sequences; secondary indices are built once."""

    def __init__(
        self,
        classes: Iterable[ClassRecord] = (),
        progids: Iterable[ProgramIdRecord] = (),
        interfaces: Iterable[InterfaceRecord] = (),
        categories: Mapping[UUID, Iterable[ClassRecord]] | None = None,
        pre_approved: Iterable[ClassRecord] = (),
        policies: Iterable[PolicyRecord] = (),
    ) -> None:
        self._classes = tuple(classes)
        self._progids = tuple(progids)
        self._interfaces = tuple(interfaces)
        self._categories = {
            catid: tuple(entries) for catid, entries in (categories or {}).items()
        }
        self._pre_approved = tuple(pre_approved)
        self._policies = tuple(policies)

        self._classes_by_name = tuple(sorted(self._classes, key=lambda c: c.name))
        self._interfaces_by_name = tuple(sorted(self._interfaces, key=lambda i: i.name))
        self._by_server = self._group_by_server(self._classes, local_only=False)
        self._by_local_server = self._group_by_server(self._classes, local_only=True)

    @staticmethod
    def _group_by_server(
        classes: Sequence[ClassRecord], *, local_only: bool
    ) -> dict[str, tuple[ClassRecord, ...]]:
        groups: dict[str, list[ClassRecord]] = defaultdict(list)
        for entry in classes:
            if local_only and not entry.is_local_server:
                continue
            groups[entry.server].append(entry)
        return {path: tuple(groups[path]) for path in sorted(groups)}

    def all_classes(self) -> Sequence[ClassRecord]:
        return self._classes

    def classes_by_name(self) -> Sequence[ClassRecord]:
        return self._classes_by_name

    def all_progids(self) -> Sequence[ProgramIdRecord]:
        return self._progids

    def classes_by_server(self, local: bool) -> Mapping[str, Sequence[ClassRecord]]:
        return self._by_local_server if local else self._by_server

    def all_interfaces(self) -> Sequence[InterfaceRecord]:
        return self._interfaces

    def interfaces_by_name(self) -> Sequence[InterfaceRecord]:
        return self._interfaces_by_name

    def implemented_categories(self) -> Mapping[UUID, Sequence[ClassRecord]]:
        return self._categories

    def pre_approved(self) -> Sequence[ClassRecord]:
        return self._pre_approved

    def low_rights_policies(self) -> Sequence[PolicyRecord]:
        return self._policies


class StaticInterfaceResolver:
    """Interface resolver answering from a fixed clsid -> interfaces table.

    Answers are cached per clsid; ``force_refresh`` re-reads the table.
    Clsids in ``failures`` raise ``InterfaceQueryError`` until cleared.
    """

    def __init__(
        self,
        supported: Mapping[UUID, Iterable[InterfaceRecord]] | None = None,
        failures: Iterable[UUID] = (),
    ) -> None:
        self._supported: dict[UUID, tuple[InterfaceRecord, ...]] = {
            clsid: tuple(items) for clsid, items in (supported or {}).items()
        }
        self._failures: set[UUID] = set(failures)
        self._cache: dict[UUID, tuple[InterfaceRecord, ...]] = {}
        self.query_count = 0

    def set_supported(self, clsid: UUID, interfaces: Iterable[InterfaceRecord]) -> None:
        self._supported[clsid] = tuple(interfaces)

    def fail(self, clsid: UUID) -> None:
        self._failures.add(clsid)

    def recover(self, clsid: UUID | None = None) -> None:
        if clsid is None:
            self._failures.clear()
        else:
            self._failures.discard(clsid)

    def supported_interfaces(
        self, entry: ClassRecord, force_refresh: bool = False
    ) -> Sequence[InterfaceRecord]:
        if not force_refresh and entry.clsid in self._cache:
            return self._cache[entry.clsid]
        self.query_count += 1
        if entry.clsid in self._failures:
            self._cache.pop(entry.clsid, None)
            raise InterfaceQueryError(
                "Error querying COM interfaces",
                context={"clsid": entry.clsid, "name": entry.name},
            )
        result = self._supported.get(entry.clsid, ())
        self._cache[entry.clsid] = result
        logger.debug("Queried %d interfaces for %s", len(result), entry.clsid)
        return result


class MappingCategoryNames:
    """Category names from a dict; unknown ids render as braced GUIDs."""

    def __init__(self, names: Mapping[UUID, str] | None = None) -> None:
        self._names = dict(names or {})

    def name_of(self, catid: UUID) -> str:
        return self._names.get(catid) or braced(catid)
