"""Utilities for vmrun MCP."""

from vmrun_mcp.utils.console import ColorfulFormatter
from vmrun_mcp.utils.shell import (
    DEFAULT_ESCAPER,
    ArgumentEscaper,
    PosixEscaper,
    WindowsEscaper,
    escape_arg,
    select_escaper,
    valid_path,
)

__all__ = [
    "ArgumentEscaper",
    "ColorfulFormatter",
    "DEFAULT_ESCAPER",
    "escape_arg",
    "PosixEscaper",
    "select_escaper",
    "valid_path",
    "WindowsEscaper",
]
