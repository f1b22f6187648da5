"""Environment variable helpers and local address lookup."""

from __future__ import annotations

import ipaddress
import os
import re
import socket

import psutil

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def get_env(key: str) -> str:
    """Return the variable's value, or an empty string when it is unset."""
    return os.environ.get(key, "")


def get_env_or_default(key: str, default: str) -> str:
    """Return the variable's value, or ``default`` when it is unset or empty."""
    return get_env(key) or default


def get_env_or_default_int(key: str, default: int) -> int:
    """Return the variable as an integer, or ``default`` if unset or invalid."""
    value = get_env(key)
    if not value or not _INT_PATTERN.fullmatch(value):
        return default
    number = int(value)
    if not _INT_MIN <= number <= _INT_MAX:
        return default
    return number


def get_env_or_default_bool(key: str, default: bool) -> bool:
    """Return the variable as a boolean, or ``default`` if unset or invalid."""
    value = get_env(key)
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    return default


def _is_global_unicast(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    if isinstance(ip, ipaddress.IPv4Address) and ip == ipaddress.IPv4Address("255.255.255.255"):
        return False
    return not (ip.is_unspecified or ip.is_loopback or ip.is_multicast or ip.is_link_local)


def _parse_address(family: int, address: str):
    if family not in (socket.AF_INET, socket.AF_INET6):
        return None
    try:
        ip = ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def get_internal_ip() -> str:
    """Return the first IPv4 interface address that is neither link-local nor global unicast.

    Returns an empty string when no such address exists.
    """
    for addresses in psutil.net_if_addrs().values():
        for entry in addresses:
            ip = _parse_address(entry.family, entry.address)
            if ip is None or ip.is_link_local or _is_global_unicast(ip):
                continue
            if isinstance(ip, ipaddress.IPv4Address):
                return str(ip)
    return ""