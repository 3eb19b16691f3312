"""vmrun subprocess invocation."""

import asyncio
import logging

from vmrun_mcp.models import CommandResult

logger = logging.getLogger(__name__)

# vmrun prefixes its failure messages with this marker
ERROR_PREFIX = "Error: "


class VMRunError(Exception):
    """A vmrun call failed.

    Raised for non-zero exits and spawn failures, and by reply parsers for
    failures vmrun only reports through its output.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ):
        """Initialize vmrun error.

        Args:
            message: Human readable failure description
            command: Command line that was executed, if any
            stdout: Captured standard output
            stderr: Captured standard error
            returncode: Exit status, None if the process never ran
        """
        self.message = message
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)


def _decode(data: bytes | None) -> str:
    if data is None:
        return ""
    return data.decode("utf-8", errors="replace")


def failure_message(command: str, stdout: str, stderr: str, returncode: int) -> str:
    """Describe a failed vmrun call.

    Uses the text after vmrun's ``Error: `` prefix (stderr first, stdout if
    stderr is empty) when present, else a generic exit status message.
    """
    output = stderr or stdout
    if output.startswith(ERROR_PREFIX):
        return f"{output[len(ERROR_PREFIX):].strip()}\n    cmd: {command}"

    message = f"Command failed with exit code {returncode}: {command}"
    if stderr.strip():
        message = f"{message}\n{stderr.strip()}"
    return message


async def run_vmrun(command: str) -> CommandResult:
    """Run a vmrun command line through the host shell.

    Output is buffered in full. There is no timeout: a hung vmrun process
    hangs the call.

    Args:
        command: Fully escaped command line

    Returns:
        CommandResult with stdout and stderr (stderr may be non-empty)

    Raises:
        VMRunError: If the process cannot be started or exits non-zero
    """
    logger.debug("Running: %s", command)

    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.debug("Failed to start vmrun: %s", e)
        raise VMRunError(str(e), command=command) from e

    raw_stdout, raw_stderr = await process.communicate()
    stdout = _decode(raw_stdout)
    stderr = _decode(raw_stderr)

    if process.returncode != 0:
        message = failure_message(command, stdout, stderr, process.returncode)
        logger.debug("vmrun exited with %s: %s", process.returncode, message)
        raise VMRunError(
            message,
            command=command,
            stdout=stdout,
            stderr=stderr,
            returncode=process.returncode,
        )

    return CommandResult(stdout=stdout, stderr=stderr)
