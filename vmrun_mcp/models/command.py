"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a vmrun call that exited with status 0."""

    stdout: str
    stderr: str


@dataclass(frozen=True)
class GuestProcess:
    """One entry of listProcessesInGuest output."""

    process_id: int
    owner: str
    command: str
