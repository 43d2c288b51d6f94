"""Registration records and the tree nodes views are built from."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Union
from uuid import UUID

if TYPE_CHECKING:
    from crv_core.views import ViewMode

PLACEHOLDER_LABEL = "IUnknown"


class ClassKind(str, Enum):
    """Activation kind of a registered class."""

    IN_PROC_SERVER = "InProcServer32"
    LOCAL_SERVER = "LocalServer32"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class InterfaceRecord:
    iid: UUID
    name: str
    proxy_clsid: UUID | None = None


@dataclass(frozen=True)
class ClassRecord:
    """A registered class and its activation metadata.

    Records order by ``clsid`` then ``name``; that is the order classes take
    inside a category group.
    """

    clsid: UUID
    name: str
    kind: ClassKind = ClassKind.UNKNOWN
    server: str = ""
    cmdline: str = ""
    progids: tuple[str, ...] = ()
    appid: UUID | None = None
    typelib: UUID | None = None
    proxies: tuple[InterfaceRecord, ...] = ()

    def sort_key(self) -> tuple[int, str]:
        return (self.clsid.int, self.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ClassRecord):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @property
    def is_local_server(self) -> bool:
        return self.kind is ClassKind.LOCAL_SERVER


@dataclass(frozen=True)
class ProgramIdRecord:
    """A textual program id, bound to a class when that class is registered."""

    progid: str
    clsid: UUID | None = None
    entry: ClassRecord | None = None


@dataclass(frozen=True)
class CategoryKey:
    catid: UUID


@dataclass(frozen=True)
class PolicyRecord:
    name: str
    policy: int
    classes: tuple[ClassRecord, ...] = ()


Record = Union[ClassRecord, ProgramIdRecord, InterfaceRecord, CategoryKey, PolicyRecord]
Payload = Union[Record, UUID, None]


class ResolutionState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


def class_entry_of(payload: Payload) -> ClassRecord | None:
    """Return the class record a payload activates, if any."""
    match payload:
        case ClassRecord():
            return payload
        case ProgramIdRecord(entry=entry):
            return entry
        case InterfaceRecord() | CategoryKey() | PolicyRecord() | UUID() | None:
            return None
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


@dataclass(eq=False)
class TreeNode:
    """A node in a view.

    ``children`` is mutated only by branch resolution. Nodes compare by
    identity so a filtered forest can be checked against its baseline.
    """

    label: str
    tooltip: str = ""
    payload: Payload = None
    children: list["TreeNode"] = field(default_factory=list)
    state: ResolutionState = ResolutionState.UNRESOLVED

    @classmethod
    def placeholder(cls) -> "TreeNode":
        return cls(label=PLACEHOLDER_LABEL)

    @property
    def is_placeholder(self) -> bool:
        return self.payload is None and self.label == PLACEHOLDER_LABEL and not self.children

    @property
    def class_entry(self) -> ClassRecord | None:
        return class_entry_of(self.payload)

    @property
    def resolved(self) -> bool:
        return self.state is ResolutionState.RESOLVED

    def reset_placeholder(self) -> None:
        self.children = [TreeNode.placeholder()]

    def walk(self) -> Iterator["TreeNode"]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class Forest:
    """The ordered roots of one view, with the view's title."""

    title: str
    mode: "ViewMode"
    roots: tuple[TreeNode, ...] = ()

    def __len__(self) -> int:
        return len(self.roots)

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.roots)

    def __getitem__(self, index: int) -> TreeNode:
        return self.roots[index]

    def labels(self) -> list[str]:
        return [node.label for node in self.roots]

    def with_roots(self, roots: tuple[TreeNode, ...]) -> "Forest":
        return Forest(title=self.title, mode=self.mode, roots=roots)
