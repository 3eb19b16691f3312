"""Data models for vmrun MCP."""

from vmrun_mcp.models.command import CommandResult, GuestProcess
from vmrun_mcp.models.options import GuestRunOptions, HostType, VMRunOptions

__all__ = [
    "CommandResult",
    "GuestProcess",
    "GuestRunOptions",
    "HostType",
    "VMRunOptions",
]
