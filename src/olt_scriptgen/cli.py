"""``olt-scriptgen`` command line.

Examples::

    olt-scriptgen autofind autofind.log
    olt-scriptgen batch autofind.log --biz 100 199 --iptv 200 299
    olt-scriptgen generate --tab huawei-manual --reason 下发失败 \\
        --serial 48575443EC5525AD --slot 1 --port 14 --device-num 5 \\
        --biz-vlan 100 --iptv-vlan 200
    olt-scriptgen export configs.csv
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from olt_scriptgen.client.errors import StoreError, ValidationError
from olt_scriptgen.config import Settings
from olt_scriptgen.generator import generate_batch, generate_from_form, load_batch_input
from olt_scriptgen.model.config import DeviceConfigRecord
from olt_scriptgen.model.form import FormInput
from olt_scriptgen.model.provision import Reason, Tab
from olt_scriptgen.model.vlan import VlanRange
from olt_scriptgen.parser.autofind import parse_autofind
from olt_scriptgen.utils.export import export_configs_csv
from olt_scriptgen.utils.validate import check_reason

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_STORE = 2


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return pathlib.Path(path).read_text(encoding="utf-8")


def _cmd_autofind(args: argparse.Namespace, settings: Settings) -> int:
    result = parse_autofind(_read(args.file))
    if result.warning:
        print(result.warning, file=sys.stderr)
    else:
        print(result.text)
    return EXIT_OK


def _cmd_batch(args: argparse.Namespace, settings: Settings) -> int:
    biz_range = VlanRange.parse(args.biz[0], args.biz[1], "业务VLAN")
    iptv_range = VlanRange.parse(args.iptv[0], args.iptv[1], "IPTV VLAN")
    csv_text, warning = load_batch_input(_read(args.file))
    if warning:
        print(warning, file=sys.stderr)
        return EXIT_OK
    result = generate_batch(csv_text, biz_range, iptv_range)
    for line_warning in result.warnings:
        print(line_warning.message, file=sys.stderr)
    sys.stdout.write(result.text)
    return EXIT_OK


def _cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    tab = Tab(args.tab)
    form = FormInput(
        serial=args.serial,
        slot=args.slot,
        pon_port=args.port,
        device_num=args.device_num,
        biz_vlan=args.biz_vlan,
        iptv_vlan=args.iptv_vlan,
        ip_addr=args.ip,
        voice_ip_addr=args.voice_ip,
        multicast_vlan=args.multicast_vlan,
        voice=args.voice,
    )
    script = generate_from_form(form, tab, args.reason, serial_policy=settings.serial_policy)
    sys.stdout.write(script)

    if args.save:
        record = DeviceConfigRecord.from_form(
            form,
            vendor=tab.vendor,
            reason=check_reason(args.reason),
            command_output=script,
            config_type=tab.value,
        )
        if not settings.store_enabled:
            print(
                "保存配置到数据库失败: 未配置 OLT_SCRIPTGEN_STORE_URL / OLT_SCRIPTGEN_STORE_KEY",
                file=sys.stderr,
            )
            return EXIT_STORE
        try:
            settings.open_store().add_config(record)
        except StoreError as exc:
            logger.error("保存配置到数据库失败: %s", exc)
            print(f"保存配置到数据库失败: {exc}", file=sys.stderr)
            return EXIT_STORE
        print("配置保存成功", file=sys.stderr)
    return EXIT_OK


def _cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    try:
        configs = settings.open_store().get_all_configs()
    except StoreError as exc:
        print(f"导出数据失败: {exc}", file=sys.stderr)
        return EXIT_STORE
    if not configs:
        print("暂无数据可导出", file=sys.stderr)
        return EXIT_OK
    pathlib.Path(args.output).write_text(export_configs_csv(configs), encoding="utf-8")
    print(f"导出数据成功: {args.output}", file=sys.stderr)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="olt-scriptgen",
        description="Generate Huawei / ZTE OLT provisioning scripts",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("autofind", help="extract CSV records from a discovery log")
    p.add_argument("file", help="discovery-log file, or - for stdin")
    p.set_defaults(func=_cmd_autofind)

    p = sub.add_parser("batch", help="generate scripts for many devices")
    p.add_argument("file", help="discovery log or CSV lines, or - for stdin")
    p.add_argument("--biz", nargs=2, metavar=("START", "END"), required=True)
    p.add_argument("--iptv", nargs=2, metavar=("START", "END"), required=True)
    p.set_defaults(func=_cmd_batch)

    p = sub.add_parser("generate", help="generate the script for one device")
    p.add_argument("--tab", required=True, choices=[t.value for t in Tab])
    p.add_argument("--reason", required=True, choices=[r.value for r in Reason])
    p.add_argument("--serial", default="")
    p.add_argument("--slot", default="")
    p.add_argument("--port", default="")
    p.add_argument("--device-num", default="")
    p.add_argument("--biz-vlan", default="")
    p.add_argument("--iptv-vlan", default="")
    p.add_argument("--ip", default="")
    p.add_argument("--voice-ip", default="")
    p.add_argument("--multicast-vlan", default="")
    p.add_argument("--voice", action="store_true")
    p.add_argument("--save", action="store_true", help="store the script in the config store")
    p.set_defaults(func=_cmd_generate)

    p = sub.add_parser("export", help="export stored configs as CSV")
    p.add_argument("output", help="CSV file to write")
    p.set_defaults(func=_cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env()
        return int(args.func(args, settings))
    except ValidationError as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
