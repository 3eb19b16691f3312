"""vmrun command line assembly."""

from collections.abc import Iterable, Sequence
from typing import Any

from vmrun_mcp.models import VMRunOptions
from vmrun_mcp.utils.shell import DEFAULT_ESCAPER, ArgumentEscaper

DEFAULT_VMRUN = "vmrun"


def _global_args(options: VMRunOptions) -> list[Any]:
    """Host and credential flags, in the order vmrun expects them."""
    args: list[Any] = ["-T", options.host_type.value]

    for flag, value in (
        ("-h", options.host_name),
        ("-P", options.host_port),
        ("-u", options.host_username),
        ("-p", options.host_password),
        ("-vp", options.vm_password),
    ):
        if value:
            args.extend((flag, value))

    # -gu and -gp always travel together
    if options.guest_username or options.guest_password:
        args.extend(("-gu", options.guest_username or ""))
        args.extend(("-gp", options.guest_password or ""))

    return args


def build_args(
    operation: str,
    args: Sequence[Any] | None,
    options: VMRunOptions,
    escaper: ArgumentEscaper = DEFAULT_ESCAPER,
) -> list[str]:
    """Build the escaped token list for a vmrun call.

    Args:
        operation: vmrun sub-command (e.g. "start", "listSnapshots")
        args: Positional arguments following the sub-command
        options: Host and credential options
        escaper: Quoting strategy for the target shell

    Returns:
        Escaped tokens: global flags, operation, then arguments
    """
    flags = [escaper.escape(token) for token in _global_args(options)]
    # The operation is a fixed keyword and goes through as-is
    return [*flags, operation, *(escaper.escape(arg) for arg in args or ())]


def executable(
    options: VMRunOptions, escaper: ArgumentEscaper = DEFAULT_ESCAPER
) -> str:
    """Escaped vmrun executable path (bare ``vmrun`` when unset)."""
    if options.vmrun_path is None:
        return DEFAULT_VMRUN
    return escaper.escape(options.vmrun_path)


def build_command(
    operation: str,
    args: Sequence[Any] | None,
    options: VMRunOptions,
    raw_args: Iterable[str] | None = None,
    escaper: ArgumentEscaper = DEFAULT_ESCAPER,
) -> str:
    """Assemble the full shell command line for a vmrun call.

    Raw arguments are appended verbatim, without escaping, for callers that
    already formatted them (e.g. ``key=value`` pairs).

    Returns:
        Single command string ready for the host shell
    """
    parts = [executable(options, escaper), *build_args(operation, args, options, escaper)]
    if raw_args:
        parts.extend(raw_args)
    return " ".join(parts)
