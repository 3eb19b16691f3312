"""vmrun handle: one method per vmrun sub-command."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Literal

from vmrun_mcp.models import (
    CommandResult,
    GuestProcess,
    GuestRunOptions,
    VMRunOptions,
)
from vmrun_mcp.services.builder import build_args, build_command
from vmrun_mcp.services.invoke import VMRunError, run_vmrun
from vmrun_mcp.services.parsers import (
    DIRECTORY_EXISTS,
    DIRECTORY_HEADER,
    FILE_EXISTS,
    SNAPSHOTS_HEADER,
    TOTAL_HEADER,
    contains_marker,
    parse_list,
    parse_processes,
    parse_scalar,
)
from vmrun_mcp.utils.shell import DEFAULT_ESCAPER, ArgumentEscaper, valid_path

VariableScope = Literal["runtimeConfig", "guestEnv", "guestVar"]
CloneType = Literal["full", "linked"]

# Message vmrun prints when stopping a machine that is already off
NOT_POWERED_ON = "is not powered on"


class VMRun:
    """Handle for driving vmrun with a fixed set of options.

    The options record is immutable; ``with_options`` and
    ``with_modified_options`` return new handles. Handles hold no other
    state, so calls on one handle may run concurrently.

    Example:
        >>> vm = VMRun(VMRunOptions(host_type="fusion"))
        >>> await vm.start("/vms/dev/dev.vmx")
        >>> await vm.list()
        ['/vms/dev/dev.vmx']
    """

    def __init__(
        self,
        options: VMRunOptions | None = None,
        *,
        debug: bool = False,
        logger: logging.Logger | None = None,
        escaper: ArgumentEscaper = DEFAULT_ESCAPER,
    ) -> None:
        """Initialize handle.

        Args:
            options: Host and credential options (default: local Workstation)
            debug: Log every command line before it runs
            logger: Logger receiving the debug echo
            escaper: Argument quoting strategy
        """
        self._options = options or VMRunOptions()
        self.debug = debug
        self.logger = logger or logging.getLogger(__name__)
        self.escaper = escaper

    def __repr__(self) -> str:
        return (
            f"VMRun(host_type={self._options.host_type.value!r}, "
            f"host_name={self._options.host_name!r}, debug={self.debug})"
        )

    @property
    def options(self) -> VMRunOptions:
        """Options record of this handle."""
        return self._options

    def _derive(self, options: VMRunOptions) -> "VMRun":
        return VMRun(options, debug=self.debug, logger=self.logger, escaper=self.escaper)

    def with_options(
        self, options: VMRunOptions | Mapping[str, Any] | None = None, **fields: Any
    ) -> "VMRun":
        """Return a new handle with entirely different options."""
        if isinstance(options, VMRunOptions):
            return self._derive(options.merged(fields))
        return self._derive(VMRunOptions().merged(options, **fields))

    def with_modified_options(
        self, overrides: Mapping[str, Any] | None = None, **fields: Any
    ) -> "VMRun":
        """Return a new handle whose options are these plus overrides.

        The merge is shallow: later keys win and None values are skipped.
        """
        return self._derive(self._options.merged(overrides, **fields))

    async def vmrun(
        self,
        operation: str,
        args: Sequence[Any] | None = None,
        raw_args: Iterable[str] | None = None,
    ) -> CommandResult:
        """Run any vmrun sub-command with this handle's options.

        Args:
            operation: vmrun sub-command
            args: Positional arguments, escaped for the shell
            raw_args: Trailing arguments passed through verbatim

        Raises:
            VMRunError: If vmrun fails to start or exits non-zero
        """
        raw_args = list(raw_args or ())
        if self.debug:
            tokens = build_args(operation, args, self._options, self.escaper)
            self.logger.warning("$ vmrun %s", " ".join([*tokens, *raw_args]))

        command = build_command(
            operation, args, self._options, raw_args, escaper=self.escaper
        )
        return await run_vmrun(command)

    # Power

    async def start(self, vmx_file: str, gui: bool = False) -> CommandResult:
        """Power on a virtual machine, with or without its window."""
        return await self.vmrun("start", [vmx_file, "gui" if gui else "nogui"])

    async def power_off(self, vmx_file: str) -> bool:
        """Hard power off.

        Returns:
            True if the machine was running, False if it was already off
        """
        try:
            await self.vmrun("stop", [vmx_file, "hard"])
        except VMRunError as e:
            if NOT_POWERED_ON in e.message:
                self.logger.debug("%s was already powered off", vmx_file)
                return False
            raise
        return True

    async def shutdown(self, vmx_file: str) -> CommandResult:
        """Soft stop (guest OS shutdown)."""
        return await self.vmrun("stop", [vmx_file, "soft"])

    async def reset(self, vmx_file: str) -> CommandResult:
        """Hard reset."""
        return await self.vmrun("reset", [vmx_file, "hard"])

    async def restart(self, vmx_file: str) -> CommandResult:
        """Soft reset (guest OS restart)."""
        return await self.vmrun("reset", [vmx_file, "soft"])

    async def suspend(self, vmx_file: str, hard: bool = False) -> CommandResult:
        return await self.vmrun("suspend", [vmx_file, "hard" if hard else "soft"])

    async def pause(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("pause", [vmx_file])

    async def unpause(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("unpause", [vmx_file])

    # Snapshots

    async def list_snapshots(self, vmx_file: str) -> list[str]:
        """List snapshot names of a virtual machine."""
        result = await self.vmrun("listSnapshots", [vmx_file])
        return parse_list(result.stdout, SNAPSHOTS_HEADER)

    async def snapshot(self, vmx_file: str, snapshot_name: str) -> CommandResult:
        return await self.vmrun("snapshot", [vmx_file, snapshot_name])

    async def delete_snapshot(
        self, vmx_file: str, snapshot_name: str, delete_children: bool = False
    ) -> CommandResult:
        """Delete a snapshot, optionally with all of its children."""
        args = [vmx_file, snapshot_name]
        if delete_children:
            args.append("andDeleteChildren")
        return await self.vmrun("deleteSnapshot", args)

    async def revert_to_snapshot(
        self, vmx_file: str, snapshot_name: str
    ) -> CommandResult:
        return await self.vmrun("revertToSnapshot", [vmx_file, snapshot_name])

    # Guest programs and processes

    async def run_program_in_guest(
        self,
        vmx_file: str,
        program_path: str,
        program_args: Sequence[Any] | None = None,
        options: GuestRunOptions | None = None,
        raw_args: Iterable[str] | None = None,
    ) -> CommandResult:
        """Run a program inside the guest.

        Args:
            vmx_file: Virtual machine configuration file
            program_path: Program path in the guest
            program_args: Escaped program arguments
            options: -noWait / -activeWindow / -interactive flags
            raw_args: Program arguments passed through verbatim
        """
        args: list[Any] = [vmx_file]
        if options:
            args.extend(options.to_flags())
        args.append(valid_path(program_path))
        args.extend(program_args or ())
        return await self.vmrun("runProgramInGuest", args, raw_args)

    async def run_script_in_guest(
        self,
        vmx_file: str,
        interpreter_path: str,
        script: str,
        options: GuestRunOptions | None = None,
    ) -> CommandResult:
        """Run script text with an interpreter inside the guest."""
        args: list[Any] = [vmx_file]
        if options:
            args.extend(options.to_flags())
        args.extend((valid_path(interpreter_path), script))
        return await self.vmrun("runScriptInGuest", args)

    async def list_processes_in_guest(self, vmx_file: str) -> list[GuestProcess]:
        """List processes running in the guest."""
        result = await self.vmrun("listProcessesInGuest", [vmx_file])
        return parse_processes(result.stdout)

    async def kill_process_in_guest(
        self, vmx_file: str, process_id: int | str
    ) -> CommandResult:
        return await self.vmrun("killProcessInGuest", [vmx_file, process_id])

    # Guest file system

    async def file_exists_in_guest(self, vmx_file: str, path: str) -> bool:
        """True if a file exists in the guest."""
        result = await self.vmrun("fileExistsInGuest", [vmx_file, valid_path(path)])
        return contains_marker(result.stdout, FILE_EXISTS)

    async def directory_exists_in_guest(self, vmx_file: str, path: str) -> bool:
        """True if a directory exists in the guest."""
        result = await self.vmrun(
            "directoryExistsInGuest", [vmx_file, valid_path(path)]
        )
        return contains_marker(result.stdout, DIRECTORY_EXISTS)

    async def delete_file_in_guest(self, vmx_file: str, path: str) -> CommandResult:
        return await self.vmrun("deleteFileInGuest", [vmx_file, valid_path(path)])

    async def create_directory_in_guest(
        self, vmx_file: str, path: str
    ) -> CommandResult:
        return await self.vmrun("createDirectoryInGuest", [vmx_file, valid_path(path)])

    async def delete_directory_in_guest(
        self, vmx_file: str, path: str
    ) -> CommandResult:
        return await self.vmrun("deleteDirectoryInGuest", [vmx_file, valid_path(path)])

    async def create_tempfile_in_guest(self, vmx_file: str) -> str:
        """Create a temporary file in the guest.

        Returns:
            Path of the new file in the guest

        Raises:
            VMRunError: If vmrun reports an error or prints no path
        """
        result = await self.vmrun("createTempfileInGuest", [vmx_file])
        path = parse_scalar(result)
        if not path:
            raise VMRunError(
                "createTempfileInGuest returned no path",
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return path

    async def list_directory_in_guest(
        self, vmx_file: str, directory_path: str
    ) -> list[str]:
        """List entry names of a guest directory."""
        result = await self.vmrun(
            "listDirectoryInGuest", [vmx_file, valid_path(directory_path)]
        )
        return parse_list(result.stdout, DIRECTORY_HEADER)

    async def copy_file_from_host_to_guest(
        self, vmx_file: str, path_in_host: str, path_in_guest: str
    ) -> CommandResult:
        return await self.vmrun(
            "copyFileFromHostToGuest",
            [vmx_file, valid_path(path_in_host), valid_path(path_in_guest)],
        )

    async def copy_file_from_guest_to_host(
        self, vmx_file: str, path_in_guest: str, path_in_host: str
    ) -> CommandResult:
        return await self.vmrun(
            "copyFileFromGuestToHost",
            [vmx_file, valid_path(path_in_guest), valid_path(path_in_host)],
        )

    async def rename_file_in_guest(
        self, vmx_file: str, original_name: str, new_name: str
    ) -> CommandResult:
        return await self.vmrun(
            "renameFileInGuest",
            [vmx_file, valid_path(original_name), valid_path(new_name)],
        )

    async def capture_screen(self, vmx_file: str, path_on_host: str) -> CommandResult:
        """Save a screenshot of the guest to a file on the host."""
        return await self.vmrun("captureScreen", [vmx_file, valid_path(path_on_host)])

    # Shared folders

    async def set_shared_folder_state(
        self, vmx_file: str, share_name: str, host_path: str, writable: bool = True
    ) -> CommandResult:
        return await self.vmrun(
            "setSharedFolderState",
            [
                vmx_file,
                share_name,
                valid_path(host_path),
                "writable" if writable else "readonly",
            ],
        )

    async def add_shared_folder(
        self, vmx_file: str, share_name: str, new_host_path: str
    ) -> CommandResult:
        return await self.vmrun(
            "addSharedFolder", [vmx_file, share_name, valid_path(new_host_path)]
        )

    async def remove_shared_folder(
        self, vmx_file: str, share_name: str
    ) -> CommandResult:
        return await self.vmrun("removeSharedFolder", [vmx_file, share_name])

    async def enable_shared_folders(
        self, vmx_file: str, runtime: bool = False
    ) -> CommandResult:
        args = [vmx_file, "runtime"] if runtime else [vmx_file]
        return await self.vmrun("enableSharedFolders", args)

    async def disable_shared_folders(
        self, vmx_file: str, runtime: bool = False
    ) -> CommandResult:
        args = [vmx_file, "runtime"] if runtime else [vmx_file]
        return await self.vmrun("disableSharedFolders", args)

    # Variables and guest info

    async def write_variable(
        self,
        vmx_file: str,
        scope: VariableScope | None,
        name: str | int,
        value: str | int,
    ) -> CommandResult:
        """Write a runtimeConfig, guestEnv or guestVar variable."""
        args: list[Any] = [vmx_file]
        if scope:
            args.append(scope)
        args.extend((name, value))
        return await self.vmrun("writeVariable", args)

    async def read_variable(
        self, vmx_file: str, scope: VariableScope | None, name: str | int
    ) -> str:
        """Read a runtimeConfig, guestEnv or guestVar variable."""
        args: list[Any] = [vmx_file]
        if scope:
            args.append(scope)
        args.append(name)
        return parse_scalar(await self.vmrun("readVariable", args))

    async def get_guest_ip_address(self, vmx_file: str) -> str:
        return parse_scalar(await self.vmrun("getGuestIPAddress", [vmx_file]))

    async def check_tools_state(self, vmx_file: str) -> str:
        """VMware Tools state (e.g. "running", "installed", "unknown")."""
        return parse_scalar(await self.vmrun("checkToolsState", [vmx_file]))

    async def install_tools(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("installTools", [vmx_file])

    # Inventory

    async def list_registered_vm(self) -> list[str]:
        """List virtual machines registered on the host."""
        result = await self.vmrun("listRegisteredVM")
        return parse_list(result.stdout, TOTAL_HEADER)

    async def register(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("register", [vmx_file])

    async def unregister(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("unregister", [vmx_file])

    async def upgrade_vm(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("upgradevm", [vmx_file])

    async def delete_vm(self, vmx_file: str) -> CommandResult:
        return await self.vmrun("deleteVM", [vmx_file])

    async def clone(
        self,
        vmx_file: str,
        new_vmx_file: str,
        clone_type: CloneType = "linked",
        snapshot_name: str | None = None,
        clone_name: str | None = None,
    ) -> CommandResult:
        """Create a full or linked clone.

        Args:
            vmx_file: Source virtual machine
            new_vmx_file: Configuration file of the clone
            clone_type: "full" or "linked" (anything but "full" is linked)
            snapshot_name: Snapshot to clone from
            clone_name: Display name of the clone
        """
        args = [vmx_file, new_vmx_file, "full" if clone_type == "full" else "linked"]
        if snapshot_name:
            args.append(f"-snapshot={snapshot_name}")
        if clone_name:
            args.append(f"-cloneName={clone_name}")
        return await self.vmrun("clone", args)

    # Defined last: inside the class body this name shadows the builtin
    async def list(self) -> list[str]:
        """List .vmx paths of running virtual machines."""
        result = await self.vmrun("list")
        return parse_list(result.stdout, TOTAL_HEADER)
