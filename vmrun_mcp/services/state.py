"""Global state management for the vmrun MCP server."""

import logging

from vmrun_mcp.config import Settings
from vmrun_mcp.services.vmrun import VMRun

# Global state (initialized on first access)
_settings: Settings | None = None
_vmrun: VMRun | None = None


def get_settings() -> Settings:
    """Get or create settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_vmrun() -> VMRun:
    """Get or create the vmrun handle used by the MCP tools."""
    global _vmrun
    if _vmrun is None:
        settings = get_settings()
        _vmrun = VMRun(
            settings.to_options(),
            debug=settings.debug,
            logger=logging.getLogger("vmrun_mcp.commands"),
        )
    return _vmrun


def reset_state() -> None:
    """Reset global state for testing.

    This function clears the singleton instances, allowing tests
    to start with fresh state. Should only be used in test fixtures.
    """
    global _settings, _vmrun
    _settings = None
    _vmrun = None


def set_settings(settings: Settings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def set_vmrun(vmrun: VMRun) -> None:
    """Set the global vmrun handle.

    Allows tests to inject a handle with a mocked invocation layer.

    Args:
        vmrun: VMRun instance to use globally.
    """
    global _vmrun
    _vmrun = vmrun
