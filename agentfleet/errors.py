"""
Agent Fleet Errors

Exception hierarchy shared by the client, registry and workflows.
"""

from typing import Optional


class FleetError(Exception):
    """Base class for all agentfleet errors."""


class ConfigError(FleetError):
    """Invalid configuration value."""


class RemoteServiceError(FleetError):
    """A call to the remote service failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RemoteServiceError):
    """The remote service answered with a body we could not interpret."""


class DuplicateAgentError(FleetError):
    """Appending a record would break registry uniqueness (mint or name)."""
