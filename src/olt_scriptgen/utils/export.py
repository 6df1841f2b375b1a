"""CSV export of stored device configs."""

from __future__ import annotations

import csv
import datetime
import io
from collections.abc import Iterable

from olt_scriptgen.model.config import STORED_FRAME_NO, DeviceConfigRecord
from olt_scriptgen.model.provision import Vendor

EXPORT_HEADER: list[str] = [
    "设备类型",
    "序列号",
    "框号",
    "槽位",
    "PON口",
    "设备号",
    "业务VLAN",
    "IPTV VLAN",
    "IP地址",
    "语音IP地址",
    "组播VLAN",
    "语音开启",
    "创建时间",
    "原因",
]


def export_filename(today: datetime.date | None = None) -> str:
    """Default download name, e.g. ``配置数据_2024-05-01.csv``."""
    day = today or datetime.date.today()
    return f"配置数据_{day.isoformat()}.csv"


def _created_date(created_at: str | None) -> str:
    """``YYYY-MM-DD`` part of an ISO timestamp (``""`` when unset)."""
    if not created_at:
        return ""
    try:
        return datetime.datetime.fromisoformat(created_at.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return created_at[:10]


def config_row(config: DeviceConfigRecord) -> list[str]:
    """One export row for *config*."""
    device_label = Vendor.HUAWEI.label if config.device_type == Vendor.HUAWEI.value else Vendor.ZTE.label
    return [
        device_label,
        config.serial,
        config.frame_no or STORED_FRAME_NO,
        config.slot,
        config.pon_port,
        config.device_num,
        config.biz_vlan,
        config.iptv_vlan,
        config.ip_addr or "",
        config.voice_ip_addr or "",
        config.multicast_vlan or "",
        "是" if config.has_voice else "否",
        _created_date(config.created_at),
        config.reason or "",
    ]


def export_configs_csv(configs: Iterable[DeviceConfigRecord]) -> str:
    """Render *configs* as CSV text with the Chinese column header."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for config in configs:
        writer.writerow(config_row(config))
    return buf.getvalue()
