"""Contracts for the collaborators the view engine reads from."""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence
from uuid import UUID

from crv_core.models import ClassRecord, InterfaceRecord, PolicyRecord, ProgramIdRecord


class RecordStore(Protocol):
    """Read-only access to indexed registration records."""

    def all_classes(self) -> Sequence[ClassRecord]: ...

    def classes_by_name(self) -> Sequence[ClassRecord]: ...

    def all_progids(self) -> Sequence[ProgramIdRecord]: ...

    def classes_by_server(self, local: bool) -> Mapping[str, Sequence[ClassRecord]]: ...

    def all_interfaces(self) -> Sequence[InterfaceRecord]: ...

    def interfaces_by_name(self) -> Sequence[InterfaceRecord]: ...

    def implemented_categories(self) -> Mapping[UUID, Sequence[ClassRecord]]: ...

    def pre_approved(self) -> Sequence[ClassRecord]: ...

    def low_rights_policies(self) -> Sequence[PolicyRecord]: ...


class InterfaceResolver(Protocol):
    """Queries which interfaces a class supports.

    Implementations raise ``InterfaceQueryError`` when the external query
    fails; the call may block for a noticeable time.
    """

    def supported_interfaces(
        self, entry: ClassRecord, force_refresh: bool = False
    ) -> Sequence[InterfaceRecord]: ...


class CategoryNames(Protocol):
    def name_of(self, catid: UUID) -> str: ...
