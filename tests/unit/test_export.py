"""Unit tests for olt_scriptgen.utils.export."""

from __future__ import annotations

import csv
import datetime
import io

from olt_scriptgen.model.config import DeviceConfigRecord
from olt_scriptgen.utils.export import (
    EXPORT_HEADER,
    config_row,
    export_configs_csv,
    export_filename,
)


def _record(**overrides: object) -> DeviceConfigRecord:
    values: dict[str, object] = {
        "device_type": "huawei",
        "serial": "48575443EC5525AD",
        "slot": "1",
        "pon_port": "14",
        "device_num": "5",
        "biz_vlan": "100",
        "iptv_vlan": "200",
        "has_voice": True,
        "command_output": "ignored",
        "created_at": "2024-05-01T08:30:00.123456+00:00",
        "reason": "下发失败",
    }
    values.update(overrides)
    return DeviceConfigRecord(**values)  # type: ignore[arg-type]


def test_export_filename() -> None:
    assert export_filename(datetime.date(2024, 5, 1)) == "配置数据_2024-05-01.csv"


def test_config_row_huawei() -> None:
    assert config_row(_record()) == [
        "华为OLT",
        "48575443EC5525AD",
        "0",
        "1",
        "14",
        "5",
        "100",
        "200",
        "",
        "",
        "",
        "是",
        "2024-05-01",
        "下发失败",
    ]


def test_config_row_zte_without_voice() -> None:
    row = config_row(_record(device_type="zte", has_voice=False, created_at=None, reason=None))
    assert row[0] == "中兴OLT"
    assert row[11] == "否"
    assert row[12] == ""
    assert row[13] == ""


def test_config_row_zulu_timestamp() -> None:
    assert config_row(_record(created_at="2024-05-31T23:59:59Z"))[12] == "2024-05-31"


def test_export_csv_has_header_and_rows() -> None:
    text = export_configs_csv([_record(), _record(serial="SN2")])
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == EXPORT_HEADER
    assert [r[1] for r in rows[1:]] == ["48575443EC5525AD", "SN2"]
    assert "ignored" not in text


def test_export_csv_quotes_commas() -> None:
    text = export_configs_csv([_record(serial="A,B")])
    assert '"A,B"' in text
