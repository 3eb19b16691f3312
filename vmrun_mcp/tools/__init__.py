"""MCP tools for vmrun MCP."""

from vmrun_mcp.tools.vm import vm_guest, vm_list, vm_power, vm_snapshots

__all__ = ["vm_guest", "vm_list", "vm_power", "vm_snapshots"]
