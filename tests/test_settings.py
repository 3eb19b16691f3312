"""Tests for environment settings."""

import pytest

from vmrun_mcp.config import Settings
from vmrun_mcp.models import HostType, VMRunOptions

VMRUN_ENV = (
    "VMRUN_PATH",
    "VMRUN_HOST_TYPE",
    "VMRUN_HOST_NAME",
    "VMRUN_HOST_PORT",
    "VMRUN_HOST_USERNAME",
    "VMRUN_HOST_PASSWORD",
    "VMRUN_VM_PASSWORD",
    "VMRUN_GUEST_USERNAME",
    "VMRUN_GUEST_PASSWORD",
    "VMRUN_DEBUG",
    "VMRUN_TRANSPORT",
    "VMRUN_HTTP_HOST",
    "VMRUN_HTTP_PORT",
    "VMRUN_LOG_LEVEL",
    "VMRUN_LOG_COLORS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start each test without VMRUN_* variables."""
    for key in VMRUN_ENV:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()

    assert settings.transport == "stdio"
    assert settings.http_port == 8000
    assert settings.debug is False
    assert settings.to_options() == VMRunOptions()


def test_connection_options_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_PATH", "/opt/vmware/bin/vmrun")
    monkeypatch.setenv("VMRUN_HOST_TYPE", "vcenter")
    monkeypatch.setenv("VMRUN_HOST_NAME", "vc.example.com")
    monkeypatch.setenv("VMRUN_HOST_PORT", "443")
    monkeypatch.setenv("VMRUN_HOST_USERNAME", "admin")
    monkeypatch.setenv("VMRUN_HOST_PASSWORD", "secret")
    monkeypatch.setenv("VMRUN_GUEST_USERNAME", "guest")

    options = Settings.from_env().to_options()

    assert options.vmrun_path == "/opt/vmware/bin/vmrun"
    assert options.host_type is HostType.VCENTER
    assert options.host_name == "vc.example.com"
    assert options.host_port == 443
    assert options.host_username == "admin"
    assert options.host_password == "secret"
    assert options.guest_username == "guest"
    assert options.guest_password is None


def test_empty_values_are_absent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_HOST_NAME", "")
    monkeypatch.setenv("VMRUN_HOST_PORT", "")

    options = Settings.from_env().to_options()

    assert options.host_name is None
    assert options.host_port is None


def test_invalid_port_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_HOST_PORT", "not-a-port")

    assert Settings.from_env().host_port is None


def test_unknown_host_type_defaults_to_workstation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_HOST_TYPE", "hyperv")
    assert Settings.from_env().host_type is HostType.WORKSTATION


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("true", True), ("no", False)])
def test_debug_flag(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("VMRUN_DEBUG", value)
    assert Settings.from_env().debug is expected


def test_transport_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_TRANSPORT", "HTTP")
    assert Settings.from_env().transport == "http"

    monkeypatch.setenv("VMRUN_TRANSPORT", "carrier-pigeon")
    assert Settings.from_env().transport == "stdio"


def test_log_level_is_uppercased(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMRUN_LOG_LEVEL", "debug")
    assert Settings.from_env().log_level == "DEBUG"
