"""Tests for the view builder."""

from __future__ import annotations

import pytest

from crv_common.errors import ConfigurationError, ViewBuildError
from crv_core.api import (
    PLACEHOLDER_LABEL,
    CategoryKey,
    PolicyRecord,
    ProgramIdRecord,
    TreeNode,
    ViewMode,
    build_view,
)
from tests.helpers.records import (
    ALLOW_POLICY,
    ALPHA,
    BROKER,
    CONTROLS,
    IMARSHAL,
    POLICY_CLASS,
    ZETA,
)

pytestmark = pytest.mark.unit_core


def _shape(node: TreeNode) -> tuple:
    return (node.label, node.payload, tuple(_shape(c) for c in node.children))


def _class_bearing(forest) -> list[TreeNode]:
    return [node for root in forest for node in root.walk() if node.class_entry is not None]


def test_there_are_ten_modes_with_titles() -> None:
    assert len(ViewMode) == 10
    assert ViewMode.CLASSES.title == "CLSIDs"
    assert ViewMode.IE_LOW_RIGHTS.title == "IE Low Rights Elevation Policy"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("classes-by-name", ViewMode.CLASSES_BY_NAME),
        ("CLASSES_BY_SERVER", ViewMode.CLASSES_BY_SERVER),
        (ViewMode.PRE_APPROVED, ViewMode.PRE_APPROVED),
    ],
)
def test_view_mode_parse(value, expected) -> None:
    assert ViewMode.parse(value) is expected


def test_view_mode_parse_rejects_unknown() -> None:
    with pytest.raises(ConfigurationError):
        ViewMode.parse("by-colour")


def test_classes_view_keeps_store_order(store) -> None:
    forest = build_view(ViewMode.CLASSES, store)

    assert forest.title == "CLSIDs"
    assert forest.labels() == [
        "11111111-1111-1111-1111-111111111111 - Zeta Player",
        "22222222-2222-2222-2222-222222222222 - Alpha Viewer",
        "33333333-3333-3333-3333-333333333333 - IESupportsPolicy",
        "44444444-4444-4444-4444-444444444444 - Mid Broker",
    ]
    assert forest[0].payload is ZETA
    assert forest[0].tooltip.startswith("CLSID: {11111111-1111-1111-1111-111111111111}\n")


def test_classes_by_name_sorted(store) -> None:
    forest = build_view(ViewMode.CLASSES_BY_NAME, store)

    assert forest.labels() == ["Alpha Viewer", "IESupportsPolicy", "Mid Broker", "Zeta Player"]


def test_progids_placeholder_only_with_owning_class(store) -> None:
    forest = build_view(ViewMode.PROGRAM_IDS, store)

    assert forest.labels() == ["Alpha.Viewer.1", "Orphan.Thing"]
    bound, orphan = forest.roots
    assert isinstance(bound.payload, ProgramIdRecord)
    assert [c.label for c in bound.children] == [PLACEHOLDER_LABEL]
    assert orphan.children == []
    assert orphan.tooltip == "CLSID: {55555555-5555-5555-5555-555555555555}\n"


def test_classes_by_server_groups_sorted(store) -> None:
    forest = build_view(ViewMode.CLASSES_BY_SERVER, store)

    assert forest.labels() == [r"C:\Windows\zeta.dll", r"C:\app\alpha.exe"]
    zeta_dll, alpha_exe = forest.roots
    assert zeta_dll.payload is None
    assert zeta_dll.tooltip == r"C:\Windows\zeta.dll"
    assert [c.label for c in zeta_dll.children] == ["IESupportsPolicy", "Zeta Player"]
    assert [c.label for c in alpha_exe.children] == ["Alpha Viewer", "Mid Broker"]


def test_classes_by_local_server_only_lists_local_servers(store) -> None:
    forest = build_view(ViewMode.CLASSES_BY_LOCAL_SERVER, store)

    assert forest.title == "CLSIDs by Local Server"
    assert forest.labels() == [r"C:\app\alpha.exe"]


@pytest.mark.parametrize("mode", [ViewMode.CLASSES_BY_SERVER, ViewMode.IMPLEMENTED_CATEGORIES])
def test_grouped_views_are_sorted(store, categories, mode) -> None:
    forest = build_view(mode, store, categories)

    labels = forest.labels()
    assert labels == sorted(labels)
    for root in forest:
        if mode is ViewMode.CLASSES_BY_SERVER:
            keys = [child.label for child in root.children]
        else:
            keys = [child.class_entry.sort_key() for child in root.children]
        assert keys == sorted(keys)


def test_interfaces_views(store) -> None:
    plain = build_view(ViewMode.INTERFACES, store)
    by_name = build_view(ViewMode.INTERFACES_BY_NAME, store)

    assert plain.labels()[1] == "00000003-0000-0000-c000-000000000046 - IMarshal"
    assert by_name.labels() == ["IDispatch", "IMarshal", "IUnknown"]
    assert all(node.children == [] for node in [*plain, *by_name])
    assert by_name[1].payload is IMARSHAL
    assert "ProxyCLSID: {00000320-0000-0000-C000-000000000046}" in by_name[1].tooltip


def test_implemented_categories(store, categories) -> None:
    forest = build_view(ViewMode.IMPLEMENTED_CATEGORIES, store, categories)

    assert forest.labels() == [
        "Automation Objects",
        "Controls",
        "{0DE86A57-2BAA-11CF-A229-00AA003D7352}",
    ]
    controls = forest[1]
    assert controls.payload == CategoryKey(CONTROLS)
    assert controls.tooltip == "CATID: {40FC6ED4-2438-11CF-A3DB-080036F12502}"
    assert [c.payload for c in controls.children] == [ZETA, BROKER]


def test_pre_approved_uses_class_labels(store) -> None:
    forest = build_view(ViewMode.PRE_APPROVED, store)

    assert forest.title == "Explorer PreApproved"
    assert [n.payload for n in forest] == [POLICY_CLASS, ZETA]
    assert forest[0].label.endswith(" - IESupportsPolicy")


def test_low_rights_policies_expand_governed_classes(store) -> None:
    forest = build_view(ViewMode.IE_LOW_RIGHTS, store)

    (policy,) = forest.roots
    assert policy.label == "Allow"
    assert isinstance(policy.payload, PolicyRecord)
    assert policy.payload is ALLOW_POLICY
    assert policy.tooltip == "Elevation Policy: 3"
    assert [c.payload for c in policy.children] == [ALPHA, BROKER]
    for child in policy.children:
        assert [g.label for g in child.children] == [PLACEHOLDER_LABEL]


@pytest.mark.parametrize("mode", list(ViewMode))
def test_build_is_deterministic(store, categories, mode) -> None:
    first = build_view(mode, store, categories)
    second = build_view(mode, store, categories)

    assert [_shape(n) for n in first] == [_shape(n) for n in second]
    assert all(a is not b for a, b in zip(first, second))


@pytest.mark.parametrize("mode", list(ViewMode))
def test_class_bearing_nodes_start_with_one_placeholder(store, categories, mode) -> None:
    forest = build_view(mode, store, categories)

    for node in _class_bearing(forest):
        assert len(node.children) == 1
        assert node.children[0].payload is None
        assert node.children[0].is_placeholder
        assert not node.resolved


@pytest.mark.parametrize("mode", list(ViewMode))
def test_empty_store_gives_empty_forest(empty_store, mode) -> None:
    forest = build_view(mode, empty_store)

    assert len(forest) == 0
    assert forest.title == mode.title


def test_store_failures_become_view_build_errors(store) -> None:
    class BrokenStore:
        def all_classes(self):
            raise RuntimeError("index corrupted")

    with pytest.raises(ViewBuildError) as info:
        build_view(ViewMode.CLASSES, BrokenStore())

    assert info.value.context == {"mode": "classes"}
    assert isinstance(info.value.__cause__, RuntimeError)
