"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

from vmrun_mcp.models import HostType, VMRunOptions

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Settings for the vmrun MCP server.

    Handles parsing, validation, and defaults for all VMRUN_* env vars.
    """

    # vmrun connection
    vmrun_path: str | None = field(default=None)
    host_type: HostType = field(default=HostType.WORKSTATION)
    host_name: str | None = field(default=None)
    host_port: int | None = field(default=None)
    host_username: str | None = field(default=None)
    host_password: str | None = field(default=None)
    vm_password: str | None = field(default=None)
    guest_username: str | None = field(default=None)
    guest_password: str | None = field(default=None)

    # Echo each vmrun command line before running it
    debug: bool = field(default=False)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            vmrun_path=os.getenv("VMRUN_PATH"),
            host_type=cls._get_host_type(),
            host_name=os.getenv("VMRUN_HOST_NAME") or None,
            host_port=cls._get_int("VMRUN_HOST_PORT", None),
            host_username=os.getenv("VMRUN_HOST_USERNAME") or None,
            host_password=os.getenv("VMRUN_HOST_PASSWORD") or None,
            vm_password=os.getenv("VMRUN_VM_PASSWORD") or None,
            guest_username=os.getenv("VMRUN_GUEST_USERNAME") or None,
            guest_password=os.getenv("VMRUN_GUEST_PASSWORD") or None,
            debug=cls._get_bool("VMRUN_DEBUG", False),
            transport=cls._get_transport(),
            http_host=os.getenv("VMRUN_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("VMRUN_HTTP_PORT", 8000) or 8000,
            log_level=os.getenv("VMRUN_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("VMRUN_LOG_COLORS", True),
        )

    def to_options(self) -> VMRunOptions:
        """Build the vmrun options record these settings describe."""
        return VMRunOptions(
            vmrun_path=self.vmrun_path,
            host_type=self.host_type,
            host_name=self.host_name,
            host_port=self.host_port,
            host_username=self.host_username,
            host_password=self.host_password,
            vm_password=self.vm_password,
            guest_username=self.guest_username,
            guest_password=self.guest_password,
        )

    @staticmethod
    def _get_int(key: str, default: int | None) -> int | None:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None or value == "":
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_host_type() -> HostType:
        """Get host type from environment, warning on unknown names."""
        value = os.getenv("VMRUN_HOST_TYPE", "").strip()
        host_type = HostType.resolve(value)
        if value and host_type is HostType.WORKSTATION and value.lower() not in (
            "ws",
            "workstation",
        ):
            logger.warning(
                "Unknown VMRUN_HOST_TYPE %r, using %s", value, host_type.value
            )
        return host_type

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("VMRUN_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        if transport:
            logger.warning("Invalid VMRUN_TRANSPORT %r, using stdio", transport)
        return "stdio"
