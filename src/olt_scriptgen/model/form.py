"""Raw operator input as typed into the single-device form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from olt_scriptgen.model.config import DeviceConfigRecord


@dataclass(frozen=True)
class FormInput:
    """Unvalidated form fields.  Every value is kept as typed.

    Attributes:
        serial: Hardware serial, or the ``0734...`` account on deploy tabs.
        slot: OLT slot number.
        pon_port: PON port number.
        device_num: ONT index within the PON port.
        biz_vlan: Business outer VLAN.
        iptv_vlan: IPTV outer VLAN.
        ip_addr: ONU management address (Huawei ONU tab).
        voice_ip_addr: Voice gateway address (Huawei ONU tab).
        multicast_vlan: Service-port joined to the multicast VLAN.
        voice: Voice service enabled.
    """

    serial: str = ""
    slot: str = ""
    pon_port: str = ""
    device_num: str = ""
    biz_vlan: str = ""
    iptv_vlan: str = ""
    ip_addr: str = ""
    voice_ip_addr: str = ""
    multicast_vlan: str = ""
    voice: bool = False

    @classmethod
    def from_config(cls, config: DeviceConfigRecord) -> FormInput:
        """Load a stored config back into the form."""
        return cls(
            serial=config.serial or "",
            slot=config.slot or "",
            pon_port=config.pon_port or "",
            device_num=config.device_num or "",
            biz_vlan=config.biz_vlan or "",
            iptv_vlan=config.iptv_vlan or "",
            ip_addr=config.ip_addr or "",
            voice_ip_addr=config.voice_ip_addr or "",
            multicast_vlan=config.multicast_vlan or "",
            voice=bool(config.has_voice),
        )
