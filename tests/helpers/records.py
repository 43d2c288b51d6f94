"""Sample registration records shared by the tests."""

from __future__ import annotations

from uuid import UUID

from crv_core.api import (
    ClassKind,
    ClassRecord,
    InterfaceRecord,
    PolicyRecord,
    ProgramIdRecord,
)

IUNKNOWN = InterfaceRecord(UUID("00000000-0000-0000-c000-000000000046"), "IUnknown")
IDISPATCH = InterfaceRecord(UUID("00020400-0000-0000-c000-000000000046"), "IDispatch")
IMARSHAL = InterfaceRecord(
    UUID("00000003-0000-0000-c000-000000000046"),
    "IMarshal",
    proxy_clsid=UUID("00000320-0000-0000-c000-000000000046"),
)

ZETA = ClassRecord(
    clsid=UUID("11111111-1111-1111-1111-111111111111"),
    name="Zeta Player",
    kind=ClassKind.IN_PROC_SERVER,
    server=r"C:\Windows\zeta.dll",
    cmdline=r"C:\Windows\zeta.dll",
)
ALPHA = ClassRecord(
    clsid=UUID("22222222-2222-2222-2222-222222222222"),
    name="Alpha Viewer",
    kind=ClassKind.LOCAL_SERVER,
    server=r"C:\app\alpha.exe",
    cmdline=r"C:\app\alpha.exe /automation",
    progids=("Alpha.Viewer.1",),
    appid=UUID("aaaaaaaa-0000-0000-0000-000000000001"),
    proxies=(IMARSHAL,),
)
POLICY_CLASS = ClassRecord(
    clsid=UUID("33333333-3333-3333-3333-333333333333"),
    name="IESupportsPolicy",
    kind=ClassKind.IN_PROC_SERVER,
    server=r"C:\Windows\zeta.dll",
    cmdline=r"C:\Windows\zeta.dll",
)
BROKER = ClassRecord(
    clsid=UUID("44444444-4444-4444-4444-444444444444"),
    name="Mid Broker",
    kind=ClassKind.LOCAL_SERVER,
    server=r"C:\app\alpha.exe",
    cmdline=r"C:\app\alpha.exe",
)

CONTROLS = UUID("40fc6ed4-2438-11cf-a3db-080036f12502")
AUTOMATION = UUID("40fc6ed5-2438-11cf-a3db-080036f12502")
UNNAMED = UUID("0de86a57-2baa-11cf-a229-00aa003d7352")

ALPHA_PROGID = ProgramIdRecord("Alpha.Viewer.1", ALPHA.clsid, ALPHA)
ORPHAN_PROGID = ProgramIdRecord("Orphan.Thing", UUID("55555555-5555-5555-5555-555555555555"))
ALLOW_POLICY = PolicyRecord("Allow", 3, (ALPHA, BROKER))


