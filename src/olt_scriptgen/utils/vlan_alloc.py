"""Inner-VLAN offsets and the rolling allocators used for batch work.

Both allocators are plain objects: every parse or batch run builds its own
instance, so repeated or interleaved runs never share counters.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from olt_scriptgen.model.vlan import VlanPair, VlanRange

# C-VLAN offsets of the access network convention.
INNER_VLAN_BIZ_OFFSET: int = 1000
INNER_VLAN_IPTV_OFFSET: int = 3500

# Discovery-log batches number ONTs from here on every new PON port.
FIRST_DEVICE_NUMBER: int = 80

Triple = tuple[str, str, str]


def inner_vlan_biz(device_number: int) -> int:
    """Business inner VLAN for ONT *device_number*."""
    return device_number + INNER_VLAN_BIZ_OFFSET


def inner_vlan_iptv(device_number: int) -> int:
    """IPTV inner VLAN for ONT *device_number*."""
    return device_number + INNER_VLAN_IPTV_OFFSET


@dataclass
class DeviceNumberAllocator:
    """Hands out ONT numbers while walking a discovery log in order.

    The number resets to :data:`FIRST_DEVICE_NUMBER` whenever the
    (frame, slot, port) triple differs from the previous record and
    increments by one while it stays the same.
    """

    first: int = FIRST_DEVICE_NUMBER
    last_triple: Triple | None = None
    current: int = FIRST_DEVICE_NUMBER

    def next(self, triple: Triple) -> int:
        if triple != self.last_triple:
            self.current = self.first
        else:
            self.current += 1
        self.last_triple = triple
        return self.current


@dataclass
class VlanAllocator:
    """Rolls business / IPTV outer VLANs across a batch.

    Both counters advance (wrapping to the range start once the range end
    is reached) whenever the triple differs from the previous record.  The
    initial previous triple is empty, which counts as different, so the
    first device receives ``start + 1`` unless ``start == end``.
    """

    biz_range: VlanRange
    iptv_range: VlanRange
    last_triple: Triple = ("", "", "")
    current_biz: int = field(init=False)
    current_iptv: int = field(init=False)

    def __post_init__(self) -> None:
        self.current_biz = self.biz_range.start
        self.current_iptv = self.iptv_range.start

    def next(self, triple: Triple) -> VlanPair:
        if triple != self.last_triple:
            self.current_biz = _advance(self.current_biz, self.biz_range)
            self.current_iptv = _advance(self.current_iptv, self.iptv_range)
        self.last_triple = triple
        return VlanPair(biz=self.current_biz, iptv=self.current_iptv)


def _advance(current: int, pool: VlanRange) -> int:
    return current + 1 if current < pool.end else pool.start
