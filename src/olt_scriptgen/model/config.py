"""Persisted device configuration (one row of the ``device_configs`` table)."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from olt_scriptgen.model.form import FormInput
from olt_scriptgen.model.provision import Reason, Vendor

logger = logging.getLogger(__name__)

# Frame number written with every stored config.
STORED_FRAME_NO: str = "0"

# Required columns kept as text even when the store hands back numbers.
_TEXT_COLUMNS: tuple[str, ...] = (
    "device_type",
    "serial",
    "slot",
    "pon_port",
    "device_num",
    "biz_vlan",
    "iptv_vlan",
    "command_output",
)


@dataclass
class DeviceConfigRecord:
    """A generated script together with the input that produced it.

    Values are stored as text, exactly as they appeared in the form.

    Attributes:
        device_type: ``"huawei"`` or ``"zte"``.
        serial: Serial number or LOID account.
        slot: OLT slot number.
        pon_port: PON port number.
        device_num: ONT index within the PON port.
        biz_vlan: Business outer VLAN.
        iptv_vlan: IPTV outer VLAN.
        has_voice: Voice service enabled.
        command_output: The full generated script.
        id: Store-assigned primary key.
        config_type: Template tab that produced the script.
        frame_no: OLT frame number.
        ip_addr: ONU management address.
        voice_ip_addr: Voice gateway address.
        multicast_vlan: Multicast service-port.
        reason: Data-making reason tag.
        created_at: ISO-8601 creation timestamp (set by the store).
        updated_at: ISO-8601 update timestamp (set by the store).
    """

    device_type: str
    serial: str
    slot: str
    pon_port: str
    device_num: str
    biz_vlan: str
    iptv_vlan: str
    has_voice: bool
    command_output: str
    id: str | None = None
    config_type: str | None = None
    frame_no: str | None = None
    ip_addr: str | None = None
    voice_ip_addr: str | None = None
    multicast_vlan: str | None = None
    reason: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_form(
        cls,
        form: FormInput,
        vendor: Vendor,
        reason: Reason,
        command_output: str,
        config_type: str | None = None,
    ) -> DeviceConfigRecord:
        """Build the row saved after a single-form generation."""
        return cls(
            device_type=vendor.value,
            config_type=config_type,
            serial=form.serial,
            frame_no=STORED_FRAME_NO,
            slot=form.slot,
            pon_port=form.pon_port,
            device_num=form.device_num,
            biz_vlan=form.biz_vlan,
            iptv_vlan=form.iptv_vlan,
            ip_addr=form.ip_addr or None,
            voice_ip_addr=form.voice_ip_addr or None,
            multicast_vlan=form.multicast_vlan or None,
            has_voice=form.voice,
            command_output=command_output,
            reason=reason.value,
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> DeviceConfigRecord:
        """Build a record from a store row, ignoring unknown columns."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(row) - known)
        if unknown:
            logger.debug("Ignoring unknown config columns %s", unknown)
        values = {k: v for k, v in row.items() if k in known}
        for name in _TEXT_COLUMNS:
            value = values.get(name)
            values[name] = "" if value is None else str(value)
        values["has_voice"] = bool(values.get("has_voice", False))
        return cls(**values)

    def to_row(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict, leaving out unset optional columns."""
        return {k: v for k, v in dataclasses.asdict(self).items() if v is not None}
