"""Parser for OLT ``display ont autofind`` discovery logs.

A discovery log is a sequence of record blocks separated by a horizontal
rule of dashes.  Each usable block looks like::

    ONT SN              : 48575443EC5525AD (HWTC-EC5525AD)
    逻辑标识             : 073400629575
    框/槽/端口           : 0/1/14

Blocks without a serial or a frame/slot/port line are dropped silently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from olt_scriptgen.model.device import DeviceRecord, gate_logical_id
from olt_scriptgen.utils.vlan_alloc import DeviceNumberAllocator

logger = logging.getLogger(__name__)

# Shortest dash run treated as a block separator.  The MA5800 rule is 76
# dashes wide; older firmware prints 64.
SEPARATOR_MIN_DASHES: int = 64

# Markers that identify discovery-log text (as opposed to CSV batch lines).
AUTOFIND_MARKERS: tuple[str, ...] = ("display ont autofind", "ONT SN")

NO_RECORDS_MESSAGE: str = "未能从输入数据中提取有效设备信息"

_SN_RE: re.Pattern[str] = re.compile(r"ONT SN\s*:\s*([A-Z0-9]+)\s*\(")
_LOID_RE: re.Pattern[str] = re.compile(r"逻辑标识\s*:\s*([A-Za-z0-9]+)")
_FSP_RE: re.Pattern[str] = re.compile(r"框/槽/端口\s*:\s*(\d+)/(\d+)/(\d+)")


@dataclass
class AutofindResult:
    """Outcome of one discovery-log extraction.

    Attributes:
        records: Extracted records in log order, device numbers assigned.
        warning: Set when no record could be extracted.
    """

    records: list[DeviceRecord] = field(default_factory=list)
    warning: str | None = None

    @property
    def text(self) -> str:
        """Newline-separated ``serial,logicalId,frame,slot,port,deviceNumber`` lines."""
        return "\n".join(r.to_csv_line() for r in self.records)


def looks_like_autofind(text: str) -> bool:
    """Return True if *text* is a discovery log rather than CSV batch lines."""
    return any(marker in text for marker in AUTOFIND_MARKERS)


def split_blocks(text: str, min_dashes: int = SEPARATOR_MIN_DASHES) -> list[str]:
    """Split *text* on dash rules and drop blocks that are blank."""
    blocks = re.split(r"-{%d,}" % min_dashes, text)
    return [b for b in blocks if b.strip()]


def parse_block(block: str) -> tuple[str, str, tuple[str, str, str]] | None:
    """Extract ``(serial, logical_id, (frame, slot, port))`` from one block.

    Returns:
        The extracted fields, or ``None`` if the serial or the
        frame/slot/port line is missing.
    """
    sn_match = _SN_RE.search(block)
    if sn_match is None:
        return None
    fsp_match = _FSP_RE.search(block)
    if fsp_match is None:
        return None
    loid_match = _LOID_RE.search(block)
    logical_id = gate_logical_id(loid_match.group(1) if loid_match else None)
    frame, slot, port = fsp_match.groups()
    return sn_match.group(1), logical_id, (frame, slot, port)


def parse_autofind(text: str) -> AutofindResult:
    """Extract device records from a discovery log.

    Device numbers start at 80 on each new frame/slot/port triple and
    increment for every further record on the same triple.  No
    de-duplication is performed.

    Args:
        text: Raw discovery-log text.

    Returns:
        An :class:`AutofindResult`; ``warning`` is set when nothing was kept.
    """
    allocator = DeviceNumberAllocator()
    result = AutofindResult()
    for block in split_blocks(text):
        fields = parse_block(block)
        if fields is None:
            continue
        serial, logical_id, triple = fields
        number = allocator.next(triple)
        result.records.append(
            DeviceRecord(
                serial_number=serial,
                logical_id=logical_id,
                frame=triple[0],
                slot=triple[1],
                port=triple[2],
                device_number=number,
            )
        )

    if not result.records:
        result.warning = NO_RECORDS_MESSAGE
        logger.warning("No device records extracted from discovery log")
    else:
        logger.info("Extracted %d device record(s) from discovery log", len(result.records))
    return result
