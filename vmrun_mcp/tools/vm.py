"""MCP tools for controlling VMware virtual machines through vmrun."""

import logging

from vmrun_mcp.models import CommandResult, GuestProcess
from vmrun_mcp.services import VMRunError, get_vmrun

logger = logging.getLogger(__name__)

POWER_ACTIONS = (
    "start",
    "stop",
    "shutdown",
    "reset",
    "restart",
    "suspend",
    "pause",
    "unpause",
)
SNAPSHOT_ACTIONS = ("list", "create", "delete", "revert")
GUEST_ACTIONS = ("ps", "ip", "ls", "exists", "tools")


def _format_result(action: str, vmx: str, result: CommandResult) -> str:
    """Format a raw vmrun reply for display."""
    lines = [f"{action}: {vmx}"]
    if result.stdout.strip():
        lines.append(result.stdout.strip())
    if result.stderr.strip():
        lines.append(f"stderr: {result.stderr.strip()}")
    return "\n".join(lines)


def _format_processes(processes: list[GuestProcess]) -> str:
    if not processes:
        return "No processes reported."
    width = max(len(str(p.process_id)) for p in processes)
    lines = [f"{len(processes)} process(es):"]
    for p in processes:
        lines.append(f"  {p.process_id:>{width}}  {p.owner:<16}  {p.command}")
    return "\n".join(lines)


def _format_list(title: str, entries: list[str], empty: str) -> str:
    if not entries:
        return empty
    return "\n".join([f"{title} ({len(entries)}):", *(f"  {e}" for e in entries)])


async def vm_list(registered: bool = False) -> str:
    """List running (or registered) virtual machines.

    Args:
        registered: List registered machines instead of running ones.
    """
    vmrun = get_vmrun()
    try:
        if registered:
            vms = await vmrun.list_registered_vm()
            return _format_list("Registered VMs", vms, "No registered VMs.")
        vms = await vmrun.list()
        return _format_list("Running VMs", vms, "No running VMs.")
    except VMRunError as e:
        return f"Error: {e}"


async def vm_power(vmx: str, action: str = "start", gui: bool = False) -> str:
    """Change the power state of a virtual machine.

    Args:
        vmx: Path to the virtual machine's .vmx file.
        action: One of start, stop (hard), shutdown (soft), reset (hard),
            restart (soft), suspend, pause, unpause.
        gui: Show the VM window when starting.

    Examples:
        vm_power("/vms/dev/dev.vmx") - Start headless
        vm_power("/vms/dev/dev.vmx", "stop") - Hard power off
    """
    if action not in POWER_ACTIONS:
        return f"Error: Unknown action '{action}'. Expected one of: {', '.join(POWER_ACTIONS)}"

    vmrun = get_vmrun()
    logger.info("Power action %s on %s", action, vmx)
    try:
        if action == "stop":
            was_on = await vmrun.power_off(vmx)
            return f"Powered off: {vmx}" if was_on else f"Already off: {vmx}"
        if action == "start":
            result = await vmrun.start(vmx, gui=gui)
        else:
            result = await getattr(vmrun, action)(vmx)
    except VMRunError as e:
        logger.warning("Power action %s on %s failed: %s", action, vmx, e)
        return f"Error: {e}"

    return _format_result(action, vmx, result)


async def vm_snapshots(
    vmx: str,
    action: str = "list",
    name: str | None = None,
    delete_children: bool = False,
) -> str:
    """List, create, delete or revert snapshots.

    Args:
        vmx: Path to the virtual machine's .vmx file.
        action: list, create, delete or revert.
        name: Snapshot name (required except for list).
        delete_children: With delete, also remove child snapshots.
    """
    if action not in SNAPSHOT_ACTIONS:
        return f"Error: Unknown action '{action}'. Expected one of: {', '.join(SNAPSHOT_ACTIONS)}"
    if action != "list" and not name:
        return f"Error: Snapshot name required for '{action}'"

    vmrun = get_vmrun()
    try:
        if action == "list":
            snapshots = await vmrun.list_snapshots(vmx)
            return _format_list("Snapshots", snapshots, f"No snapshots for {vmx}.")
        if action == "create":
            result = await vmrun.snapshot(vmx, name)
        elif action == "delete":
            result = await vmrun.delete_snapshot(vmx, name, delete_children)
        else:
            result = await vmrun.revert_to_snapshot(vmx, name)
    except VMRunError as e:
        return f"Error: {e}"

    return _format_result(f"{action} snapshot {name}", vmx, result)


async def vm_guest(vmx: str, action: str = "ps", path: str | None = None) -> str:
    """Inspect a running guest (requires guest credentials for most actions).

    Args:
        vmx: Path to the virtual machine's .vmx file.
        action: ps (processes), ip (guest IP address), ls (list directory),
            exists (file or directory check), tools (VMware Tools state).
        path: Guest path for ls and exists.
    """
    if action not in GUEST_ACTIONS:
        return f"Error: Unknown action '{action}'. Expected one of: {', '.join(GUEST_ACTIONS)}"
    if action in ("ls", "exists") and not path:
        return f"Error: Guest path required for '{action}'"

    vmrun = get_vmrun()
    try:
        if action == "ps":
            return _format_processes(await vmrun.list_processes_in_guest(vmx))
        if action == "ip":
            return await vmrun.get_guest_ip_address(vmx)
        if action == "tools":
            return await vmrun.check_tools_state(vmx)
        if action == "ls":
            entries = await vmrun.list_directory_in_guest(vmx, path)
            return _format_list(path, entries, f"{path} is empty.")

        if await vmrun.directory_exists_in_guest(vmx, path):
            return f"{path}: directory"
        if await vmrun.file_exists_in_guest(vmx, path):
            return f"{path}: file"
        return f"{path}: not found"
    except VMRunError as e:
        return f"Error: {e}"
