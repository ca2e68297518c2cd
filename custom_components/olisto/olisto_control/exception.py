# custom_components/olisto/olisto_control/exception.py
"""Exceptions raised by the Olisto control library.

Every error carries an ``ErrorKind`` so callers (the Home Assistant service
layer, the CLI) can branch on ``err.kind`` instead of on exception classes.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_AUTHENTICATED = "not_authenticated"
    LOGIN_PENDING = "login_pending"
    RELOGIN_FAILED = "relogin_failed"
    MISSING_CREDENTIALS = "missing_credentials"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    PROVIDER_REJECTED = "provider_rejected"
    INVALID_ARGUMENT = "invalid_argument"


class OlistoError(Exception):
    """Base class for all Olisto errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT


class NotAuthenticated(OlistoError):
    """No usable token is cached."""

    kind = ErrorKind.NOT_AUTHENTICATED


class LoginPending(OlistoError):
    """Another login is in flight; the token must not be used yet."""

    kind = ErrorKind.LOGIN_PENDING

    def __init__(self, message: str = "Pending login, please wait.") -> None:
        super().__init__(message)


class MissingCredentials(OlistoError):
    kind = ErrorKind.MISSING_CREDENTIALS

    def __init__(self, message: str = "Olisto credentials are not set for re-login") -> None:
        super().__init__(message)


class ReloginFailed(OlistoError):
    """Logging in again with the stored credentials did not succeed.

    ``cause`` is the error the login call raised, if any.
    """

    kind = ErrorKind.RELOGIN_FAILED

    def __init__(
        self, message: str = "Re-login to Olisto failed", *, cause: OlistoError | None = None
    ) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause

    @property
    def credentials_rejected(self) -> bool:
        """True when Olisto refused the stored credentials, not just unreachable."""
        if isinstance(self.cause, ProviderRejected):
            return True
        return isinstance(self.cause, TransportError) and self.cause.unauthorized


class NotFound(OlistoError):
    """The referenced trigg/button no longer exists upstream."""

    kind = ErrorKind.NOT_FOUND


class InvalidArgument(OlistoError):
    kind = ErrorKind.INVALID_ARGUMENT


class ProviderRejected(OlistoError):
    """Well-formed provider response with ``success`` false."""

    kind = ErrorKind.PROVIDER_REJECTED

    def __init__(self, operation: str, message: str = "provider reported failure") -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class TransportError(OlistoError):
    """Network, HTTP status or decode failure of a single provider call."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self, operation: str, cause: BaseException | str, *, status: int | None = None
    ) -> None:
        super().__init__(f"Failed {operation}: {cause}")
        self.operation = operation
        self.cause = cause
        self.status = status

    @property
    def unauthorized(self) -> bool:
        return self.status == 401


__all__ = [
    "ErrorKind",
    "InvalidArgument",
    "LoginPending",
    "MissingCredentials",
    "NotAuthenticated",
    "NotFound",
    "OlistoError",
    "ProviderRejected",
    "ReloginFailed",
    "TransportError",
]
