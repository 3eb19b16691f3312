"""Services for vmrun MCP."""

from vmrun_mcp.services.builder import build_args, build_command
from vmrun_mcp.services.invoke import VMRunError, run_vmrun
from vmrun_mcp.services.parsers import (
    clean_stdout,
    contains_marker,
    parse_list,
    parse_processes,
    parse_scalar,
)
from vmrun_mcp.services.state import (
    get_settings,
    get_vmrun,
    reset_state,
    set_settings,
    set_vmrun,
)
from vmrun_mcp.services.vmrun import VMRun

__all__ = [
    "VMRun",
    "VMRunError",
    "build_args",
    "build_command",
    "clean_stdout",
    "contains_marker",
    "get_settings",
    "get_vmrun",
    "parse_list",
    "parse_processes",
    "parse_scalar",
    "reset_state",
    "run_vmrun",
    "set_settings",
    "set_vmrun",
]
