"""Shell argument escaping for vmrun command lines.

vmrun is invoked through a single shell command string rather than an argv
list, so every token has to be shell-safe on its own. Two quoting
conventions exist: Windows (``cmd.exe``, quotes doubled) and POSIX shells
(quotes backslash-escaped). The active one is picked once at import time.
"""

import re
import sys
from typing import Any, Final, Protocol, runtime_checkable

# Characters that force a token to be quoted
NEEDS_QUOTING: Final = re.compile(r'\s|[\\"\]]')


@runtime_checkable
class ArgumentEscaper(Protocol):
    """Strategy turning one raw value into a shell-safe token."""

    name: str

    def escape(self, value: Any) -> str:
        """Escape a single argument."""
        ...


def _needs_quoting(arg: str) -> bool:
    # Empty arguments must still occupy a positional slot
    return not arg or NEEDS_QUOTING.search(arg) is not None


def _coerce(value: Any) -> str:
    return "" if value is None else str(value)


class WindowsEscaper:
    """cmd.exe quoting: wrap in double quotes, double embedded quotes."""

    name = "windows"

    def escape(self, value: Any) -> str:
        arg = _coerce(value)
        if not _needs_quoting(arg):
            return arg
        return '"' + arg.replace('"', '""') + '"'


class PosixEscaper:
    """POSIX shell quoting: wrap in double quotes, backslash embedded quotes."""

    name = "posix"

    def escape(self, value: Any) -> str:
        arg = _coerce(value)
        if not _needs_quoting(arg):
            return arg
        return '"' + arg.replace('"', '\\"') + '"'


def select_escaper(platform: str | None = None) -> ArgumentEscaper:
    """Pick the escaping strategy for a platform.

    Args:
        platform: ``sys.platform``-style identifier (default: current host)

    Returns:
        WindowsEscaper for ``win*`` platforms, PosixEscaper otherwise
    """
    platform = sys.platform if platform is None else platform
    if platform.startswith("win"):
        return WindowsEscaper()
    return PosixEscaper()


DEFAULT_ESCAPER: Final[ArgumentEscaper] = select_escaper()


def escape_arg(value: Any) -> str:
    """Escape an argument with the host platform's strategy."""
    return DEFAULT_ESCAPER.escape(value)


def valid_path(path: Any) -> str:
    """Strip trailing path separators from a guest or host path.

    Args:
        path: Path to normalize (coerced to str)

    Returns:
        Path without trailing ``/`` or ``\\`` characters
    """
    return str(path).rstrip("/\\")
