"""Validation of single-device form input.

:func:`validate_form` checks the operator's input for the active tab and
returns the tab's typed provisioning request.  The first failing check
raises :class:`~olt_scriptgen.client.errors.ValidationError` with a
user-facing message; nothing is generated in that case.
"""

from __future__ import annotations

import enum
import ipaddress
import logging
import re

from olt_scriptgen.client.errors import ValidationError
from olt_scriptgen.model.form import FormInput
from olt_scriptgen.model.provision import (
    HuaweiDeploy,
    HuaweiManual,
    HuaweiMulticast,
    HuaweiOnu,
    OntAddress,
    Provisioning,
    Reason,
    Tab,
    Vendor,
    ZteC300,
    ZteC600Deploy,
    ZteC600Manual,
)
from olt_scriptgen.model.vlan import VLAN_MAX, VLAN_MIN, VlanPair
from olt_scriptgen.vendor.huawei.commands import ONU_MGMT_PREFIXES, VOICE_PREFIXES

logger = logging.getLogger(__name__)

# LOID accounts: 0734 + 8 digits, optionally suffixed with "@swzx".
DEPLOY_ACCOUNT_RE: re.Pattern[str] = re.compile(r"0734[0-9]{8}(@swzx)?")

MANUAL_SERIAL_LENGTH: int = 16

_ALNUM_RE: re.Pattern[str] = re.compile(r"[A-Za-z0-9]+")

REASON_MESSAGE: str = "请选择数据制作原因（下发失败、华为ONU或加装IPTV）"


class SerialPolicy(str, enum.Enum):
    """How serials are checked on the manual / C300 tabs.

    The form tool and its shared validation hook disagree: the form
    requires exactly 16 characters, the hook accepts any alphanumeric
    string.  Both are supported until the rule is settled.
    """

    EXACT_LENGTH = "exact-length"
    ALPHANUMERIC = "alphanumeric"


def is_deploy_account(value: str) -> bool:
    """Return True if *value* is a ``0734``-prefixed LOID account."""
    return DEPLOY_ACCOUNT_RE.fullmatch(value) is not None


def check_serial(
    tab: Tab,
    serial: str,
    policy: SerialPolicy = SerialPolicy.EXACT_LENGTH,
) -> None:
    """Apply the serial-format gate of *tab*.

    Raises:
        ValidationError: If *serial* does not fit the tab's format.
    """
    if tab.is_deploy:
        if not is_deploy_account(serial):
            raise ValidationError(field="serial", message="请输入正确的账号")
    elif tab.is_manual:
        if policy is SerialPolicy.EXACT_LENGTH:
            if len(serial) != MANUAL_SERIAL_LENGTH:
                raise ValidationError(field="serial", message="请输入正确的序列号")
        elif _ALNUM_RE.fullmatch(serial) is None:
            raise ValidationError(
                field="serial", message="请输入正确的序列号（字母和数字的组合）"
            )


def check_reason(reason: str | Reason | None) -> Reason:
    """Return the parsed reason tag.

    Raises:
        ValidationError: If no valid reason was selected.
    """
    parsed = Reason.parse(reason)
    if parsed is None:
        raise ValidationError(field="reason", message=REASON_MESSAGE)
    return parsed


def is_valid_ip_address(value: str) -> bool:
    """Dotted-quad IPv4 check; empty values pass (required-ness is checked elsewhere)."""
    if not value or not value.strip():
        return True
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_numeric(value: str) -> bool:
    """ASCII digit-string check; empty values pass."""
    if not value or not value.strip():
        return True
    return value.isascii() and value.isdigit()


def is_valid_vlan(value: str) -> bool:
    """VLAN ID check (1-4094); empty values pass."""
    if not value or not value.strip():
        return True
    return value.isascii() and value.isdigit() and VLAN_MIN <= int(value) <= VLAN_MAX


def validate_form(
    form: FormInput,
    tab: Tab,
    reason: str | Reason | None,
    vendor: Vendor | None = None,
    serial_policy: SerialPolicy = SerialPolicy.EXACT_LENGTH,
) -> Provisioning:
    """Validate *form* for *tab* and build the typed provisioning request.

    Args:
        form: Raw form fields.
        tab: Active template tab.
        reason: Selected data-making reason; must be one of :class:`Reason`.
        vendor: Selected vendor; defaults to the tab's own vendor.
        serial_policy: Serial rule for the manual / C300 tabs.

    Returns:
        One of the provisioning variants of :mod:`olt_scriptgen.model.provision`.

    Raises:
        ValidationError: On the first failing check.
    """
    check_reason(reason)

    if tab is Tab.HUAWEI_MULTICAST:
        _require(form.multicast_vlan, "multicast_vlan", "请输入组播VLAN")
    else:
        _require(form.serial, "serial", "请输入序列号")
        _require(form.slot, "slot", "请输入槽位号")
        _require(form.pon_port, "pon_port", "请输入PON口")
        _require(form.device_num, "device_num", "请输入设备号")

    if vendor is not None and vendor is not tab.vendor:
        raise ValidationError(field="tab", message="所选配置与设备类型不匹配")

    if tab is Tab.HUAWEI_ONU:
        _require(form.ip_addr, "ip_addr", "请输入IP地址")
        if not form.ip_addr.startswith(tuple(ONU_MGMT_PREFIXES)):
            raise ValidationError(
                field="ip_addr",
                message="请输入正确格式的IP地址（192.168.77.x 或 10.155.x.x）",
            )
        if form.voice:
            _require(form.voice_ip_addr, "voice_ip_addr", "请输入语音IP地址")
            if not form.voice_ip_addr.startswith(VOICE_PREFIXES):
                raise ValidationError(
                    field="voice_ip_addr",
                    message="请输入正确格式的语音IP地址（10.251.x.x 或 10.66.x.x）",
                )
        _require(form.biz_vlan, "biz_vlan", "请输入业务VLAN")
    elif tab is not Tab.HUAWEI_MULTICAST:
        _require(form.biz_vlan, "biz_vlan", "请输入业务VLAN")
        _require(form.iptv_vlan, "iptv_vlan", "请输入IPTV VLAN")

    _check_formats(form)

    if tab is not Tab.HUAWEI_MULTICAST:
        check_serial(tab, form.serial, serial_policy)

    request = _build(form, tab)
    logger.debug("Validated %s request for %r", tab.value, form.serial)
    return request


def _require(value: str, field: str, message: str) -> None:
    if not value or not value.strip():
        raise ValidationError(field=field, message=message)


def _check_formats(form: FormInput) -> None:
    if not is_valid_ip_address(form.ip_addr):
        raise ValidationError(field="ip_addr", message="IP地址格式无效")
    if not is_valid_ip_address(form.voice_ip_addr):
        raise ValidationError(field="voice_ip_addr", message="语音IP地址格式无效")
    if not is_valid_vlan(form.biz_vlan):
        raise ValidationError(field="biz_vlan", message="业务VLAN必须是1-4094之间的数字")
    if not is_valid_vlan(form.iptv_vlan):
        raise ValidationError(field="iptv_vlan", message="IPTV VLAN必须是1-4094之间的数字")
    if not is_valid_vlan(form.multicast_vlan):
        raise ValidationError(field="multicast_vlan", message="组播VLAN必须是1-4094之间的数字")
    if not is_numeric(form.slot):
        raise ValidationError(field="slot", message="槽位必须是数字")
    if not is_numeric(form.pon_port):
        raise ValidationError(field="pon_port", message="PON口必须是数字")
    if not is_numeric(form.device_num):
        raise ValidationError(field="device_num", message="设备序号必须是数字")


def _build(form: FormInput, tab: Tab) -> Provisioning:
    if tab is Tab.HUAWEI_MULTICAST:
        return HuaweiMulticast(multicast_vlan=int(form.multicast_vlan))

    address = OntAddress(
        slot=form.slot.strip(),
        port=form.pon_port.strip(),
        device_number=int(form.device_num),
    )
    if tab is Tab.HUAWEI_ONU:
        return HuaweiOnu(
            address=address,
            serial=form.serial,
            biz_vlan=int(form.biz_vlan),
            ip_addr=form.ip_addr,
            voice_ip_addr=form.voice_ip_addr,
            voice=form.voice,
        )

    vlans = VlanPair(biz=int(form.biz_vlan), iptv=int(form.iptv_vlan))
    if tab is Tab.HUAWEI_DEPLOY:
        return HuaweiDeploy(address=address, account=form.serial, vlans=vlans, voice=form.voice)
    if tab is Tab.HUAWEI_MANUAL:
        return HuaweiManual(address=address, serial=form.serial, vlans=vlans, voice=form.voice)
    if tab is Tab.ZTE_C300:
        return ZteC300(address=address, serial=form.serial, vlans=vlans, voice=form.voice)
    if tab is Tab.ZTE_C600_MANUAL:
        return ZteC600Manual(address=address, serial=form.serial, vlans=vlans, voice=form.voice)
    return ZteC600Deploy(address=address, account=form.serial, vlans=vlans, voice=form.voice)
