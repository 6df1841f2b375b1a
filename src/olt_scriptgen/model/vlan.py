"""Typed model for VLAN values and operator-supplied VLAN pools."""

from __future__ import annotations

from dataclasses import dataclass

from olt_scriptgen.client.errors import VlanRangeError

VLAN_MIN: int = 1
VLAN_MAX: int = 4094


@dataclass(frozen=True)
class VlanRange:
    """Inclusive pool of outer VLANs handed out during batch generation.

    Attributes:
        start: First VLAN of the pool.
        end: Last VLAN of the pool (``start <= end``, both within 1-4094).
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        for bound in (self.start, self.end):
            if not VLAN_MIN <= bound <= VLAN_MAX:
                raise VlanRangeError(
                    field="vlan_range",
                    message=f"VLAN {bound} outside {VLAN_MIN}-{VLAN_MAX}",
                )
        if self.start > self.end:
            raise VlanRangeError(
                field="vlan_range",
                message=f"VLAN range start {self.start} exceeds end {self.end}",
            )

    @classmethod
    def parse(cls, start: str | int | None, end: str | int | None, label: str) -> VlanRange:
        """Build a range from raw operator input.

        Args:
            start: Range start as typed by the operator.
            end: Range end as typed by the operator.
            label: Pool name used in error messages (``"业务VLAN"``, ``"IPTV VLAN"``).

        Raises:
            VlanRangeError: If either bound is missing, non-numeric, outside
                1-4094, or ``start > end``.
        """
        if start is None or end is None or str(start).strip() == "" or str(end).strip() == "":
            raise VlanRangeError(field=label, message=f"请输入{label}范围")
        try:
            lo = int(str(start).strip())
            hi = int(str(end).strip())
        except ValueError as exc:
            raise VlanRangeError(field=label, message=f"{label}范围无效") from exc
        if lo > hi or lo < VLAN_MIN or hi > VLAN_MAX:
            raise VlanRangeError(field=label, message=f"{label}范围无效")
        return cls(start=lo, end=hi)


@dataclass(frozen=True)
class VlanPair:
    """Outer business / IPTV VLANs assigned to one device.

    Attributes:
        biz: Business (internet) outer VLAN.
        iptv: IPTV outer VLAN.
    """

    biz: int
    iptv: int
