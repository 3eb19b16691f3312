"""vmrun connection and credential options."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class HostType(str, Enum):
    """Virtualization product vmrun talks to (value is the ``-T`` argument)."""

    WORKSTATION = "ws"
    PLAYER = "player"
    FUSION = "fusion"
    SERVER1 = "server1"
    SERVER2 = "server"
    WORKSTATION_SHARED = "ws-shared"
    ESX = "esx"
    VCENTER = "vc"

    @classmethod
    def resolve(cls, value: "HostType | str | None") -> "HostType":
        """Resolve a host type name or alias.

        Unknown and missing values fall back to WORKSTATION.
        """
        if isinstance(value, HostType):
            return value
        return _HOST_TYPE_ALIASES.get(str(value or "").lower(), cls.WORKSTATION)


_HOST_TYPE_ALIASES: dict[str, HostType] = {
    "ws": HostType.WORKSTATION,
    "workstation": HostType.WORKSTATION,
    "player": HostType.PLAYER,
    "fusion": HostType.FUSION,
    "server1": HostType.SERVER1,
    "server": HostType.SERVER2,
    "server2": HostType.SERVER2,
    "ws-shared": HostType.WORKSTATION_SHARED,
    "wsshared": HostType.WORKSTATION_SHARED,
    "ws_shared": HostType.WORKSTATION_SHARED,
    "esx": HostType.ESX,
    "vc": HostType.VCENTER,
    "vcenter": HostType.VCENTER,
}


@dataclass(frozen=True)
class VMRunOptions:
    """Options controlling the global flags of every vmrun call.

    A field left as None means the matching flag is omitted. The host type
    is the exception: ``-T`` is always emitted and defaults to Workstation.
    """

    vmrun_path: str | None = None
    host_type: HostType = HostType.WORKSTATION
    host_name: str | None = None
    host_port: int | str | None = None
    host_username: str | None = None
    host_password: str | None = None
    vm_password: str | None = None
    guest_username: str | None = None
    guest_password: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "host_type", HostType.resolve(self.host_type))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "VMRunOptions":
        """Build options from a mapping, ignoring None values."""
        return cls().merged(values)

    def merged(
        self, overrides: Mapping[str, Any] | None = None, **fields_: Any
    ) -> "VMRunOptions":
        """Return a copy with overrides applied (shallow, later keys win).

        None values in the overrides are skipped, so they never clear a field.

        Raises:
            TypeError: If an override names an unknown option.
        """
        changes = {**(overrides or {}), **fields_}
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise TypeError(f"Unknown vmrun option(s): {', '.join(unknown)}")
        return replace(
            self, **{key: value for key, value in changes.items() if value is not None}
        )


@dataclass(frozen=True)
class GuestRunOptions:
    """Flags for runProgramInGuest and runScriptInGuest."""

    no_wait: bool = False
    active_window: bool = False
    interactive: bool = False

    def to_flags(self) -> list[str]:
        """Return the vmrun flags in the order vmrun documents them."""
        flags = []
        if self.no_wait:
            flags.append("-noWait")
        if self.active_window:
            flags.append("-activeWindow")
        if self.interactive:
            flags.append("-interactive")
        return flags
