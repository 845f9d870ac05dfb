"""Tests for local network address resolution."""

import socket
from collections import namedtuple

import pytest

from comfydeck.network import LOOPBACK_ADDRESS, is_virtual_interface, resolve_local_ip

# Same fields as psutil's snicaddr
Address = namedtuple("Address", ["family", "address", "netmask", "broadcast", "ptp"])


def ipv4(address: str) -> Address:
    return Address(socket.AF_INET, address, "255.255.255.0", None, None)


def ipv6(address: str) -> Address:
    return Address(socket.AF_INET6, address, None, None, None)


def test_picks_ethernet_over_loopback_and_virtual():
    interfaces = {
        "lo": [ipv4("127.0.0.1"), ipv6("::1")],
        "vmnet1": [ipv4("192.168.56.1")],
        "eth0": [ipv6("fe80::1"), ipv4("192.168.1.20")],
    }

    assert resolve_local_ip(interfaces) == "192.168.1.20"


def test_falls_back_to_loopback():
    interfaces = {
        "lo": [ipv4("127.0.0.1")],
        "vboxnet0": [ipv4("192.168.56.1")],
        "VMware Network Adapter VMnet8": [ipv4("192.168.80.1")],
    }

    assert resolve_local_ip(interfaces) == LOOPBACK_ADDRESS


def test_empty_table_falls_back_to_loopback():
    assert resolve_local_ip({}) == "127.0.0.1"


def test_ipv6_only_interface_is_skipped():
    interfaces = {"eth0": [ipv6("2001:db8::1")], "wlan0": [ipv4("10.0.0.5")]}

    assert resolve_local_ip(interfaces) == "10.0.0.5"


def test_result_is_one_of_the_candidates():
    """Enumeration order is platform dependent, so only membership is checked."""
    interfaces = {"eth0": [ipv4("10.0.0.5")], "wlan0": [ipv4("10.0.0.6")]}

    assert resolve_local_ip(interfaces) in {"10.0.0.5", "10.0.0.6"}


@pytest.mark.parametrize(
    "name",
    ["vmnet8", "vboxnet0", "vEthernet (WSL)", "VirtualBox Host-Only Network", "VMware Network Adapter"],
)
def test_virtual_interfaces(name):
    assert is_virtual_interface(name)


@pytest.mark.parametrize("name", ["eth0", "en0", "Wi-Fi", "Ethernet"])
def test_physical_interfaces(name):
    assert not is_virtual_interface(name)


def test_queries_os_when_no_table_given(monkeypatch):
    monkeypatch.setattr("comfydeck.network.psutil.net_if_addrs", lambda: {"eth0": [ipv4("172.16.0.9")]})

    assert resolve_local_ip() == "172.16.0.9"
