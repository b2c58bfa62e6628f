"""Exceptions raised by the service layer."""

from typing import Any, Optional


class ProjectHubError(Exception):
    """Base class for errors the dashboard reports to the user."""


class ConfigurationError(ProjectHubError):
    """Required Telerivet settings are missing."""


class ValidationError(ProjectHubError):
    """A required input (title, row id, serial number, ...) is missing."""


class TelerivetError(ProjectHubError):
    """The remote table API failed or returned an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
