"""Parsers for vmrun's human readable replies.

vmrun has no machine readable output mode. Listings are a header line
(``Total snapshots: 2``, ``Directory list: 3`` ...) followed by one entry per
line; scalar replies are a single value plus a line break.
"""

import re
from typing import Final

from vmrun_mcp.models import CommandResult, GuestProcess
from vmrun_mcp.services.invoke import VMRunError

# Listing headers
SNAPSHOTS_HEADER: Final = "Total snapshots"
DIRECTORY_HEADER: Final = "Directory list"
PROCESSES_HEADER: Final = "Process list"
TOTAL_HEADER: Final = "Total "

# Existence markers
FILE_EXISTS: Final = "file exists"
DIRECTORY_EXISTS: Final = "directory exists"

PROCESS_LINE: Final = re.compile(r"^pid=([0-9]+), owner=(.*?), cmd=(.*)$")
LINE_BREAK: Final = re.compile(r"\r?\n")
TRAILING_LINE_BREAK: Final = re.compile(r"\r?\n\Z")


def parse_list(stdout: str, header: str) -> list[str]:
    """Extract the entries following a listing header.

    If the header is missing the whole output is treated as entries.
    At most one trailing empty entry is dropped.

    Args:
        stdout: Raw vmrun output
        header: Header text that precedes the entries

    Returns:
        Entries in output order
    """
    payload = stdout
    idx = stdout.find(header)
    if idx > -1:
        newline = stdout.find("\n", idx)
        payload = stdout[newline:] if newline > -1 else ""

    entries = LINE_BREAK.split(payload.strip())
    if entries and entries[-1] == "":
        entries.pop()
    return entries


def parse_processes(stdout: str) -> list[GuestProcess]:
    """Parse listProcessesInGuest output.

    Lines not shaped like ``pid=N, owner=X, cmd=Y`` are skipped.
    """
    processes = []
    for line in parse_list(stdout, PROCESSES_HEADER):
        match = PROCESS_LINE.match(line)
        if match:
            processes.append(
                GuestProcess(
                    process_id=int(match.group(1)),
                    owner=match.group(2),
                    command=match.group(3),
                )
            )
    return processes


def contains_marker(stdout: str, marker: str) -> bool:
    """True if the marker text appears anywhere in stdout."""
    return marker in stdout


def clean_stdout(stdout: str) -> str:
    """Remove exactly one trailing line break (``\\n`` or ``\\r\\n``)."""
    return TRAILING_LINE_BREAK.sub("", stdout, count=1)


def parse_scalar(result: CommandResult) -> str:
    """Extract a single-value reply.

    vmrun can exit 0 and still report the failure on stderr, so any stderr
    content is treated as an error.

    Raises:
        VMRunError: If stderr is not empty
    """
    if result.stderr:
        raise VMRunError(result.stderr, stdout=result.stdout, stderr=result.stderr)
    return clean_stdout(result.stdout)
