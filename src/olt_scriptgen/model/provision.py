"""Typed provisioning requests: one variant per vendor x sub-mode template.

Each variant carries only the fields its template reads, so a request that
mixes fields of two templates (e.g. a multicast script with a serial
number) cannot be expressed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from olt_scriptgen.model.vlan import VlanPair


class Vendor(str, enum.Enum):
    """OLT hardware family."""

    HUAWEI = "huawei"
    ZTE = "zte"

    @property
    def label(self) -> str:
        """Display name used in exports (``华为OLT`` / ``中兴OLT``)."""
        return "华为OLT" if self is Vendor.HUAWEI else "中兴OLT"


class Tab(str, enum.Enum):
    """Template selector (the active tab of the form tool)."""

    HUAWEI_DEPLOY = "huawei-deploy"
    HUAWEI_MANUAL = "huawei-manual"
    HUAWEI_ONU = "huawei-onu"
    HUAWEI_MULTICAST = "huawei-multicast"
    ZTE_C300 = "zte-c300"
    ZTE_C600_MANUAL = "zte-c600-manual"
    ZTE_C600_DEPLOY = "zte-c600-deploy"

    @property
    def vendor(self) -> Vendor:
        return Vendor.HUAWEI if self.value.startswith("huawei") else Vendor.ZTE

    @property
    def is_deploy(self) -> bool:
        """True for tabs authenticated by LOID (``0734...`` accounts)."""
        return self in (Tab.HUAWEI_DEPLOY, Tab.ZTE_C600_DEPLOY)

    @property
    def is_manual(self) -> bool:
        """True for tabs authenticated by the 16-character hardware serial."""
        return self in (Tab.HUAWEI_MANUAL, Tab.ZTE_C300, Tab.ZTE_C600_MANUAL)


class Reason(str, enum.Enum):
    """Why the data was made; stored as a tag on persisted configs."""

    DELIVERY_FAILED = "下发失败"
    HUAWEI_ONU = "华为ONU"
    ADD_IPTV = "加装IPTV"

    @classmethod
    def parse(cls, value: str | Reason | None) -> Reason | None:
        """Return the matching member, or ``None`` for anything else."""
        if isinstance(value, Reason):
            return value
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass(frozen=True)
class OntAddress:
    """Where an ONT lives on the OLT.

    Attributes:
        slot: OLT slot number.
        port: PON port number.
        device_number: ONT index within the PON port.
    """

    slot: str
    port: str
    device_number: int


@dataclass(frozen=True)
class HuaweiDeploy:
    """Huawei LOID-authenticated ONT (``loid-auth``)."""

    tab: ClassVar[Tab] = Tab.HUAWEI_DEPLOY

    address: OntAddress
    account: str
    vlans: VlanPair
    voice: bool = False


@dataclass(frozen=True)
class HuaweiManual:
    """Huawei serial-authenticated ONT (``sn-auth``)."""

    tab: ClassVar[Tab] = Tab.HUAWEI_MANUAL

    address: OntAddress
    serial: str
    vlans: VlanPair
    voice: bool = False


@dataclass(frozen=True)
class HuaweiOnu:
    """Huawei 24-port ONU managed by a static IP address.

    Attributes:
        address: ONT position on the OLT.
        serial: Hardware serial used for ``ont confirm``.
        biz_vlan: Outer VLAN for the 24 per-port service-ports.
        ip_addr: ONU management address (``192.168.77.x`` or ``10.155.x.x``).
        voice_ip_addr: Optional H.248 gateway address (``10.251.x.x`` / ``10.66.x.x``).
        voice: Whether voice service is enabled.
    """

    tab: ClassVar[Tab] = Tab.HUAWEI_ONU

    address: OntAddress
    serial: str
    biz_vlan: int
    ip_addr: str
    voice_ip_addr: str = ""
    voice: bool = False


@dataclass(frozen=True)
class HuaweiMulticast:
    """Huawei IGMP / multicast-VLAN membership for one service-port."""

    tab: ClassVar[Tab] = Tab.HUAWEI_MULTICAST

    multicast_vlan: int


@dataclass(frozen=True)
class ZteC300:
    """ZTE C300 serial-authenticated ONU."""

    tab: ClassVar[Tab] = Tab.ZTE_C300

    address: OntAddress
    serial: str
    vlans: VlanPair
    voice: bool = False


@dataclass(frozen=True)
class ZteC600Manual:
    """ZTE C600 serial-authenticated ONU (adds the ``vport`` layer)."""

    tab: ClassVar[Tab] = Tab.ZTE_C600_MANUAL

    address: OntAddress
    serial: str
    vlans: VlanPair
    voice: bool = False


@dataclass(frozen=True)
class ZteC600Deploy:
    """ZTE C600 LOID-authenticated ONU."""

    tab: ClassVar[Tab] = Tab.ZTE_C600_DEPLOY

    address: OntAddress
    account: str
    vlans: VlanPair
    voice: bool = False


Provisioning = (
    HuaweiDeploy
    | HuaweiManual
    | HuaweiOnu
    | HuaweiMulticast
    | ZteC300
    | ZteC600Manual
    | ZteC600Deploy
)
