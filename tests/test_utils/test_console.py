"""Tests for the console log formatter."""

import logging

from vmrun_mcp.utils.console import COLORS, ColorfulFormatter


def _record(name: str, level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, message, None, None)


def test_plain_format_has_all_columns() -> None:
    formatter = ColorfulFormatter(use_colors=False)

    line = formatter.format(_record("vmrun_mcp.services.vmrun", logging.INFO, "hello"))

    assert "| INFO     |" in line
    assert "services.vmrun" in line
    assert "vmrun_mcp." not in line
    assert line.endswith("| hello")
    assert "\033[" not in line


def test_command_echo_is_highlighted() -> None:
    formatter = ColorfulFormatter(use_colors=True)

    line = formatter.format(_record("vmrun_mcp.commands", logging.WARNING, "$ vmrun -T ws list"))

    assert f"{COLORS['bright_cyan']}$ vmrun -T ws list{COLORS['reset']}" in line


def test_vmx_paths_are_highlighted() -> None:
    formatter = ColorfulFormatter(use_colors=True)

    line = formatter.format(_record("vmrun_mcp.tools.vm", logging.INFO, "Power action start on /vms/a.vmx"))

    assert f"{COLORS['bright_blue']}/vms/a.vmx{COLORS['reset']}" in line
