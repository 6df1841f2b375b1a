"""Unit tests for olt_scriptgen.utils.vlan_alloc."""

from __future__ import annotations

from olt_scriptgen.model.vlan import VlanPair, VlanRange
from olt_scriptgen.utils.vlan_alloc import (
    DeviceNumberAllocator,
    VlanAllocator,
    inner_vlan_biz,
    inner_vlan_iptv,
)


def test_inner_vlan_offsets() -> None:
    assert inner_vlan_biz(5) == 1005
    assert inner_vlan_iptv(5) == 3505


def test_device_numbers_reset_and_increment() -> None:
    alloc = DeviceNumberAllocator()
    triples = [("0", "1", "1"), ("0", "1", "1"), ("0", "1", "2")]
    assert [alloc.next(t) for t in triples] == [80, 81, 80]


def test_vlan_rolling_and_wrap() -> None:
    alloc = VlanAllocator(biz_range=VlanRange(100, 102), iptv_range=VlanRange(200, 299))
    triples = [
        ("0", "1", "1"),
        ("0", "1", "1"),
        ("0", "1", "2"),
        ("0", "1", "2"),
        ("0", "1", "3"),
    ]
    assert [alloc.next(t).biz for t in triples] == [101, 101, 102, 102, 100]


def test_same_triple_shares_pair() -> None:
    alloc = VlanAllocator(biz_range=VlanRange(100, 199), iptv_range=VlanRange(200, 299))
    first = alloc.next(("0", "1", "1"))
    second = alloc.next(("0", "1", "1"))
    assert first == second == VlanPair(biz=101, iptv=201)


def test_ranges_wrap_independently() -> None:
    alloc = VlanAllocator(biz_range=VlanRange(100, 101), iptv_range=VlanRange(200, 203))
    pairs = [alloc.next(("0", "1", str(p))) for p in range(1, 4)]
    assert pairs == [
        VlanPair(101, 201),
        VlanPair(100, 202),
        VlanPair(101, 203),
    ]


def test_single_value_range_stays_put() -> None:
    alloc = VlanAllocator(biz_range=VlanRange(150, 150), iptv_range=VlanRange(250, 250))
    pairs = [alloc.next(("0", "1", str(p))) for p in range(1, 4)]
    assert {p.biz for p in pairs} == {150}
    assert {p.iptv for p in pairs} == {250}


def test_allocators_do_not_share_state() -> None:
    one = VlanAllocator(biz_range=VlanRange(100, 199), iptv_range=VlanRange(200, 299))
    two = VlanAllocator(biz_range=VlanRange(100, 199), iptv_range=VlanRange(200, 299))
    one.next(("0", "1", "1"))
    one.next(("0", "1", "2"))
    assert two.next(("0", "1", "1")) == VlanPair(101, 201)
