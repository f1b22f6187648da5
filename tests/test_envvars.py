import socket
from types import SimpleNamespace
from unittest import mock

import pytest

from powerai import envvars

KEY = "POWERAI_TEST_VARIABLE"


def test_get_env_unset_is_empty(monkeypatch):
    monkeypatch.delenv(KEY, raising=False)
    assert envvars.get_env(KEY) == ""


def test_get_env_returns_value(monkeypatch):
    monkeypatch.setenv(KEY, "value")
    assert envvars.get_env(KEY) == "value"


def test_get_env_or_default(monkeypatch):
    monkeypatch.delenv(KEY, raising=False)
    assert envvars.get_env_or_default(KEY, "fallback") == "fallback"
    monkeypatch.setenv(KEY, "")
    assert envvars.get_env_or_default(KEY, "fallback") == "fallback"
    monkeypatch.setenv(KEY, "set")
    assert envvars.get_env_or_default(KEY, "fallback") == "set"


@pytest.mark.parametrize("raw, expected", [("42", 42), ("-7", -7), ("+3", 3)])
def test_get_env_or_default_int_valid(monkeypatch, raw, expected):
    monkeypatch.setenv(KEY, raw)
    assert envvars.get_env_or_default_int(KEY, 99) == expected


@pytest.mark.parametrize("raw", ["", "abc", " 5", "1_000", "3.5", "99999999999999999999"])
def test_get_env_or_default_int_invalid(monkeypatch, raw):
    monkeypatch.setenv(KEY, raw)
    assert envvars.get_env_or_default_int(KEY, 99) == 99


@pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
def test_get_env_or_default_bool_true(monkeypatch, raw):
    monkeypatch.setenv(KEY, raw)
    assert envvars.get_env_or_default_bool(KEY, False) is True


@pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
def test_get_env_or_default_bool_false(monkeypatch, raw):
    monkeypatch.setenv(KEY, raw)
    assert envvars.get_env_or_default_bool(KEY, True) is False


@pytest.mark.parametrize("raw", ["", "yes", "tRUE"])
def test_get_env_or_default_bool_invalid(monkeypatch, raw):
    monkeypatch.setenv(KEY, raw)
    assert envvars.get_env_or_default_bool(KEY, True) is True


def _addr(family, address):
    return SimpleNamespace(family=family, address=address)


def test_get_internal_ip_skips_unicast_addresses():
    interfaces = {
        "eth0": [_addr(socket.AF_INET, "10.0.0.5"), _addr(socket.AF_INET6, "fe80::1%eth0")],
        "wlan0": [_addr(socket.AF_INET, "169.254.10.10")],
        "lo": [_addr(socket.AF_INET6, "::1"), _addr(socket.AF_INET, "127.0.0.1")],
    }
    with mock.patch("psutil.net_if_addrs", return_value=interfaces):
        assert envvars.get_internal_ip() == "127.0.0.1"


def test_get_internal_ip_none_found():
    interfaces = {"eth0": [_addr(socket.AF_INET, "192.168.1.20")]}
    with mock.patch("psutil.net_if_addrs", return_value=interfaces):
        assert envvars.get_internal_ip() == ""