"""
Exception classes for the dashboard.

RemoteOperationError is the single failure type the remote facades raise.
SyncController catches it at the call site that issued the request and
surfaces it through SyncState.error; it never escapes the controller.

Usage:
    from ci_dashboard.exceptions import RemoteOperationError, ValidationFailure

    raise RemoteOperationError("POST /api/repos/acme/api", status_code=409, data="exists")
    raise ValidationFailure("GET /api/repos/acme/api/validate", data="bad config")
"""

from typing import Any


class DashboardError(Exception):
    """
    Base exception class for dashboard errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code, when the failure came from a response
        error_code: Machine-readable error code for display logic
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or (f"ERR_{status_code}" if status_code else "ERR")
        super().__init__(message)


class RemoteOperationError(DashboardError):
    """
    A remote call failed (non-2xx response or transport error).

    `data` holds the decoded response payload (JSON or text), mirroring what
    the service sent back. It is None for transport-level failures.

    Usage:
        raise RemoteOperationError("DELETE /api/user", status_code=500, data="boom")
    """

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        data: Any = None,
        reason: str | None = None,
    ):
        self.operation = operation
        self.data = data
        message = f"{operation} failed"
        if status_code:
            message = f"{message} (HTTP {status_code})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            status_code=status_code,
            error_code="REMOTE_OPERATION_ERROR",
        )


class ValidationFailure(RemoteOperationError):
    """
    The validation endpoint rejected a repository's configuration.

    Routed only into SyncState.validation_info, never into SyncState.error.
    """

    def __init__(self, operation: str, status_code: int | None = None, data: Any = None):
        super().__init__(operation, status_code=status_code, data=data)
        self.error_code = "VALIDATION_FAILURE"


class NotFoundError(DashboardError):
    """
    Local lookup miss (unknown org login, repo not in the list).

    Usage:
        raise NotFoundError("Organization")  # "Organization not found"
    """

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            message=f"{resource} not found",
            status_code=404,
            error_code="NOT_FOUND",
        )


class ConfigurationError(DashboardError):
    """
    Configuration missing or invalid.

    Usage:
        raise ConfigurationError("DASHBOARD_REQUEST_TIMEOUT", "must be a number")
    """

    def __init__(self, setting: str, reason: str = "is invalid"):
        super().__init__(
            message=f"{setting} {reason}",
            error_code="CONFIGURATION_ERROR",
        )


class ControllerNotInitialized(DashboardError):
    """Raised when an intent reaches a controller whose user was deleted before load."""

    def __init__(self):
        super().__init__(
            message="Dashboard state was not initialized",
            error_code="NOT_INITIALIZED",
        )
