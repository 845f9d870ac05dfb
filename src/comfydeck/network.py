"""Local network address lookup for display and binding."""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Mapping, Sequence
from typing import Any

import psutil

__all__ = ["LOOPBACK_ADDRESS", "VIRTUAL_INTERFACE_PREFIXES", "is_virtual_interface", "resolve_local_ip"]

LOOPBACK_ADDRESS = "127.0.0.1"

# Name prefixes of common VM and container host adapters
VIRTUAL_INTERFACE_PREFIXES = ("vmnet", "vboxnet", "vethernet", "virtualbox", "vmware")


def is_virtual_interface(interface_name: str) -> bool:
    """Check whether an interface belongs to a virtualisation product."""
    return interface_name.lower().startswith(VIRTUAL_INTERFACE_PREFIXES)


def _is_internal(address: str) -> bool:
    try:
        return ipaddress.ip_address(address).is_loopback
    except ValueError:
        return False


def resolve_local_ip(interfaces: Mapping[str, Sequence[Any]] | None = None) -> str:
    """Pick the first external IPv4 address of a physical interface.

    Interfaces are visited in the order the OS reports them, which differs
    between platforms.

    Args:
        interfaces: Interface name -> addresses, shaped like
            ``psutil.net_if_addrs()``. Queried from the OS if None.

    Returns:
        The address, or 127.0.0.1 when nothing qualifies
    """
    if interfaces is None:
        interfaces = psutil.net_if_addrs()

    for interface_name, addresses in interfaces.items():
        if is_virtual_interface(interface_name):
            continue
        for address in addresses:
            if address.family == socket.AF_INET and not _is_internal(address.address):
                return address.address

    return LOOPBACK_ADDRESS
