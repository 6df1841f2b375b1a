"""Typed model for ONT device records."""

from __future__ import annotations

from dataclasses import dataclass

# Logical identifiers outside this prefix are not provisioned by LOID.
LOID_PREFIX: str = "0734"


@dataclass(frozen=True)
class DeviceRecord:
    """One optical network unit to configure.

    Attributes:
        serial_number: Vendor-assigned hardware serial (``ONT SN``).
        logical_id: LOID; empty string means "not applicable".
        frame: OLT frame number.
        slot: OLT slot number.
        port: PON port number.
        device_number: ONT index within its PON port.
    """

    serial_number: str
    logical_id: str
    frame: str
    slot: str
    port: str
    device_number: int

    @property
    def triple(self) -> tuple[str, str, str]:
        """The (frame, slot, port) addressing triple."""
        return (self.frame, self.slot, self.port)

    @property
    def has_logical_id(self) -> bool:
        return bool(self.logical_id)

    def to_csv_line(self) -> str:
        """Render as ``serial,logicalId,frame,slot,port,deviceNumber``."""
        return ",".join(
            [
                self.serial_number,
                self.logical_id,
                self.frame,
                self.slot,
                self.port,
                str(self.device_number),
            ]
        )


def gate_logical_id(value: str | None) -> str:
    """Return *value* if it carries the provisioning prefix, else ``""``."""
    if not value:
        return ""
    value = value.strip()
    return value if value.startswith(LOID_PREFIX) else ""
