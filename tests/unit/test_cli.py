"""Unit tests for olt_scriptgen.cli."""

from __future__ import annotations

import json
import pathlib

import pytest
import responses as rsps_lib

from olt_scriptgen.cli import EXIT_INVALID, EXIT_OK, EXIT_STORE, main

RULE = "-" * 76
PROJECT_URL = "https://proj.supabase.co"
TABLE_URL = f"{PROJECT_URL}/rest/v1/device_configs"

AUTOFIND_LOG = (
    "display ont autofind all\n"
    f"{RULE}\n"
    "   ONT SN              : 48575443EC5525AD (HWTC-EC5525AD)\n"
    "   逻辑标识             : 073400629575\n"
    "   框/槽/端口           : 0/1/14\n"
    f"{RULE}\n"
)

GENERATE_ARGS = [
    "generate",
    "--tab", "huawei-manual",
    "--reason", "下发失败",
    "--serial", "48575443EC5525AD",
    "--slot", "1",
    "--port", "14",
    "--device-num", "5",
    "--biz-vlan", "100",
    "--iptv-vlan", "200",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STORE_URL", "STORE_KEY", "TIMEOUT", "CACHE_TTL", "VERIFY_TLS", "SERIAL_POLICY"):
        monkeypatch.delenv(f"OLT_SCRIPTGEN_{name}", raising=False)


@pytest.fixture()
def store_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OLT_SCRIPTGEN_STORE_URL", PROJECT_URL)
    monkeypatch.setenv("OLT_SCRIPTGEN_STORE_KEY", "anon-key")


def _write(tmp_path: pathlib.Path, text: str) -> str:
    path = tmp_path / "input.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# autofind / batch
# ---------------------------------------------------------------------------


def test_autofind_prints_csv(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["autofind", _write(tmp_path, AUTOFIND_LOG)]) == EXIT_OK
    assert capsys.readouterr().out == "48575443EC5525AD,073400629575,0,1,14,80\n"


def test_autofind_warns_when_nothing_found(
    tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["autofind", _write(tmp_path, "no records here")]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "未能从输入数据中提取有效设备信息" in captured.err


def test_batch_from_discovery_log(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, AUTOFIND_LOG)
    assert main(["batch", path, "--biz", "100", "199", "--iptv", "200", "299"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("# 设备 1 配置 (48575443EC5525AD)\n")
    assert "service-port vlan 101 gpon 0/1/14 ont 80" in out
    assert out.endswith("\n\n\n")


def test_batch_reports_skipped_lines(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "SN1,,0,1,1,80\nSN2,,0,1\n")
    assert main(["batch", path, "--biz", "100", "199", "--iptv", "200", "299"]) == EXIT_OK
    captured = capsys.readouterr()
    assert "第2行数据格式不正确，已跳过" in captured.err
    assert captured.out.count("# 设备 ") == 1


def test_batch_rejects_inverted_range(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "SN1,,0,1,1,80\n")
    assert main(["batch", path, "--biz", "199", "100", "--iptv", "200", "299"]) == EXIT_INVALID
    assert "业务VLAN范围无效" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


def test_generate_prints_script(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(GENERATE_ARGS) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("interface gpon 0/1\n")
    assert out.endswith("\n\n")


def test_generate_invalid_serial(capsys: pytest.CaptureFixture[str]) -> None:
    args = [*GENERATE_ARGS]
    args[args.index("--serial") + 1] = "SHORT"
    assert main(args) == EXIT_INVALID
    assert "请输入正确的序列号" in capsys.readouterr().err


def test_generate_alphanumeric_policy_from_env(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("OLT_SCRIPTGEN_SERIAL_POLICY", "alphanumeric")
    args = [*GENERATE_ARGS]
    args[args.index("--serial") + 1] = "SHORT1"
    assert main(args) == EXIT_OK
    assert "sn-auth SHORT1" in capsys.readouterr().out


def test_generate_save_without_store_keeps_script(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([*GENERATE_ARGS, "--save"]) == EXIT_STORE
    captured = capsys.readouterr()
    assert captured.out.startswith("interface gpon 0/1\n")
    assert "保存配置到数据库失败" in captured.err
    assert "OLT_SCRIPTGEN_STORE_URL" in captured.err


@rsps_lib.activate
def test_generate_save_posts_config(store_env: None, capsys: pytest.CaptureFixture[str]) -> None:
    rsps_lib.add(rsps_lib.POST, TABLE_URL, json=[], status=201)
    assert main([*GENERATE_ARGS, "--save"]) == EXIT_OK
    body = json.loads(rsps_lib.calls[0].request.body)
    assert body[0]["config_type"] == "huawei-manual"
    assert body[0]["reason"] == "下发失败"
    assert body[0]["command_output"] == capsys.readouterr().out


@rsps_lib.activate
def test_generate_save_store_failure(store_env: None, capsys: pytest.CaptureFixture[str]) -> None:
    rsps_lib.add(rsps_lib.POST, TABLE_URL, json={"message": "boom"}, status=500)
    assert main([*GENERATE_ARGS, "--save"]) == EXIT_STORE
    assert "保存配置到数据库失败" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@rsps_lib.activate
def test_export_writes_csv(store_env: None, tmp_path: pathlib.Path) -> None:
    rsps_lib.add(
        rsps_lib.GET,
        TABLE_URL,
        json=[
            {
                "device_type": "zte",
                "serial": "ZTEGC0000001",
                "slot": "2",
                "pon_port": "3",
                "device_num": "4",
                "biz_vlan": "100",
                "iptv_vlan": "200",
                "has_voice": False,
                "command_output": "x",
            }
        ],
        status=200,
    )
    output = tmp_path / "out.csv"
    assert main(["export", str(output)]) == EXIT_OK
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("设备类型,序列号")
    assert lines[1].startswith("中兴OLT,ZTEGC0000001,0,2,3,4")


@rsps_lib.activate
def test_export_with_no_rows(
    store_env: None, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    rsps_lib.add(rsps_lib.GET, TABLE_URL, json=[], status=200)
    output = tmp_path / "out.csv"
    assert main(["export", str(output)]) == EXIT_OK
    assert not output.exists()
    assert "暂无数据可导出" in capsys.readouterr().err
