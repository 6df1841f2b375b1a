"""Command-script generation for single devices and batches."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from olt_scriptgen.client.errors import ValidationError
from olt_scriptgen.model.device import DeviceRecord
from olt_scriptgen.model.form import FormInput
from olt_scriptgen.model.provision import (
    HuaweiDeploy,
    HuaweiManual,
    HuaweiMulticast,
    HuaweiOnu,
    Provisioning,
    Reason,
    Tab,
    Vendor,
    ZteC300,
    ZteC600Deploy,
    ZteC600Manual,
)
from olt_scriptgen.model.vlan import VlanPair, VlanRange
from olt_scriptgen.parser.autofind import looks_like_autofind, parse_autofind
from olt_scriptgen.parser.batch import LineWarning, parse_batch_lines
from olt_scriptgen.utils.render import render_block, render_script
from olt_scriptgen.utils.validate import SerialPolicy, validate_form
from olt_scriptgen.utils.vlan_alloc import VlanAllocator
from olt_scriptgen.vendor.huawei import commands as huawei
from olt_scriptgen.vendor.zte import commands as zte

logger = logging.getLogger(__name__)

_BUILDERS: dict[type[Any], Callable[[Any], list[str]]] = {
    HuaweiDeploy: huawei.deploy_commands,
    HuaweiManual: huawei.manual_commands,
    HuaweiOnu: huawei.onu_commands,
    HuaweiMulticast: huawei.multicast_commands,
    ZteC300: zte.c300_commands,
    ZteC600Manual: zte.c600_manual_commands,
    ZteC600Deploy: zte.c600_deploy_commands,
}


def build_commands(request: Provisioning) -> list[str]:
    """Return the ordered command lines for one provisioning request."""
    try:
        builder = _BUILDERS[type(request)]
    except KeyError:
        raise TypeError(f"Unsupported provisioning request: {request!r}") from None
    return builder(request)


def generate_script(request: Provisioning) -> str:
    """Render one provisioning request as a pasteable script."""
    script = render_script(build_commands(request))
    logger.debug("Generated %s script (%d bytes)", request.tab.value, len(script))
    return script


def generate_from_form(
    form: FormInput,
    tab: Tab,
    reason: str | Reason | None,
    vendor: Vendor | None = None,
    serial_policy: SerialPolicy = SerialPolicy.EXACT_LENGTH,
) -> str:
    """Validate raw form input and render the script for *tab*.

    The VLANs typed into the form are used as-is; no rolling allocation
    takes place.

    Raises:
        ValidationError: If the form is rejected.
    """
    request = validate_form(form, tab, reason, vendor=vendor, serial_policy=serial_policy)
    return generate_script(request)


@dataclass(frozen=True)
class BatchEntry:
    """One generated device block.

    Attributes:
        line_no: 1-based line of the batch input the block came from.
        record: The device record.
        vlans: Outer VLANs assigned to the device.
        text: The rendered block, including its header and trailing blank lines.
    """

    line_no: int
    record: DeviceRecord
    vlans: VlanPair
    text: str


@dataclass
class BatchResult:
    """Outcome of a batch run.

    Attributes:
        entries: Generated blocks in input order.
        warnings: One entry per skipped input line.
    """

    entries: list[BatchEntry] = field(default_factory=list)
    warnings: list[LineWarning] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The full batch script."""
        return "".join(e.text for e in self.entries)


def batch_commands(line_no: int, record: DeviceRecord, vlans: VlanPair) -> list[str]:
    """Header plus the Huawei deploy (LOID) or manual (serial) block."""
    lines = [huawei.batch_header(line_no, record.serial_number)]
    if record.has_logical_id:
        lines += huawei.batch_deploy_commands(record, vlans)
    else:
        lines += huawei.batch_manual_commands(record, vlans)
    return lines


def generate_batch(text: str, biz_range: VlanRange, iptv_range: VlanRange) -> BatchResult:
    """Generate scripts for every usable line of batch CSV *text*.

    Outer VLANs roll forward whenever the frame/slot/port triple changes
    from the previous usable line; devices sharing a triple share a pair.

    Args:
        text: Batch CSV lines (``serial,logicalId,frame,slot,port,deviceNumber``).
        biz_range: Business VLAN pool.
        iptv_range: IPTV VLAN pool.

    Returns:
        A :class:`BatchResult` with one entry per usable line.

    Raises:
        ValidationError: If *text* is empty.
    """
    if not text.strip():
        raise ValidationError(field="imported_data", message="请先导入数据")

    batch = parse_batch_lines(text)
    allocator = VlanAllocator(biz_range=biz_range, iptv_range=iptv_range)
    result = BatchResult(warnings=list(batch.warnings))
    for row in batch.rows:
        vlans = allocator.next(row.record.triple)
        block = render_block(batch_commands(row.line_no, row.record, vlans))
        result.entries.append(
            BatchEntry(line_no=row.line_no, record=row.record, vlans=vlans, text=block)
        )

    logger.info(
        "Generated %d batch block(s), skipped %d line(s)",
        len(result.entries),
        len(result.warnings),
    )
    return result


def load_batch_input(text: str) -> tuple[str, str | None]:
    """Turn pasted or imported text into batch CSV lines.

    Discovery logs are run through the autofind parser; anything else is
    taken as CSV lines verbatim.

    Returns:
        ``(csv_text, warning)``; *warning* is set when a discovery log
        yielded no records, in which case *csv_text* is empty.
    """
    if looks_like_autofind(text):
        parsed = parse_autofind(text)
        return parsed.text, parsed.warning
    return text, None
