"""Shared record fixtures for crv_core tests."""

from __future__ import annotations

import pytest

from crv_core.api import (
    InMemoryRecordStore,
    MappingCategoryNames,
    StaticInterfaceResolver,
)
from tests.helpers.records import (
    ALLOW_POLICY,
    ALPHA,
    ALPHA_PROGID,
    AUTOMATION,
    BROKER,
    CONTROLS,
    IDISPATCH,
    IMARSHAL,
    IUNKNOWN,
    ORPHAN_PROGID,
    POLICY_CLASS,
    UNNAMED,
    ZETA,
)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(
        classes=[ZETA, ALPHA, POLICY_CLASS, BROKER],
        progids=[ALPHA_PROGID, ORPHAN_PROGID],
        interfaces=[IUNKNOWN, IMARSHAL, IDISPATCH],
        categories={CONTROLS: [BROKER, ZETA], AUTOMATION: [POLICY_CLASS], UNNAMED: [ALPHA]},
        pre_approved=[POLICY_CLASS, ZETA],
        policies=[ALLOW_POLICY],
    )


@pytest.fixture
def empty_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def categories() -> MappingCategoryNames:
    return MappingCategoryNames({CONTROLS: "Controls", AUTOMATION: "Automation Objects"})


@pytest.fixture
def resolver() -> StaticInterfaceResolver:
    return StaticInterfaceResolver(
        {
            ZETA.clsid: [IUNKNOWN, IDISPATCH],
            ALPHA.clsid: [IUNKNOWN, IMARSHAL],
            BROKER.clsid: [IUNKNOWN],
        }
    )
