"""Tests for service configuration."""
import pytest

from kcdb.config import BASE_PORT, get_port_from_env


def test_port_defaults_to_base(monkeypatch):
    monkeypatch.delenv("KCDB_PORT", raising=False)
    assert get_port_from_env() == BASE_PORT


def test_port_from_env(monkeypatch):
    monkeypatch.setenv("KCDB_PORT", "8042")
    assert get_port_from_env() == 8042


@pytest.mark.parametrize("raw", ["http", "0", "70000"])
def test_invalid_port_falls_back(monkeypatch, raw):
    monkeypatch.setenv("KCDB_PORT", raw)
    assert get_port_from_env() == BASE_PORT
