"""
Typed errors shared by every layer of the portfolio service.

Every failure the service reports to a caller is a `PortfolioError` carrying:

    - kind: one of the closed set of `ErrorKind` values (the discriminant)
    - public_message: human-friendly text that is safe to show to clients
    - details: structured diagnostic payload (mapping or list), echoed to clients
    - internal_message: optional diagnostic text for logs only, never serialized

The subclasses below only pin the kind, so call sites read naturally
(`raise NotFoundError(...)`). Anything that needs to branch on the failure
category reads `exc.kind`; the status lookup lives in one table.
"""

from copy import deepcopy
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    DUPLICITY = "DUPLICITY"
    VALIDATION = "VALIDATION"
    CREDENTIALS = "CREDENTIALS"
    NOT_FOUND = "NOT_FOUND"
    OWNERSHIP = "OWNERSHIP"
    SYSTEM = "SYSTEM"
    AUTHORIZATION = "AUTHORIZATION"
    MALFORMED_INPUT = "MALFORMED_INPUT"


# kind -> HTTP status. Must stay exhaustive over ErrorKind.
HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.DUPLICITY: 409,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CREDENTIALS: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.OWNERSHIP: 403,
    ErrorKind.SYSTEM: 500,
    ErrorKind.AUTHORIZATION: 401,
    ErrorKind.MALFORMED_INPUT: 400,
}

Details = dict[str, Any] | list[Any]


class PortfolioError(Exception):
    """
    Base class for every typed failure raised by the service.

    Instances are treated as immutable: attributes are exposed through read-only
    properties and `details` is copied on the way in and on the way out.
    """

    def __init__(
        self,
        kind: ErrorKind,
        public_message: str,
        details: Details | None = None,
        internal_message: str | None = None,
    ):
        super().__init__(public_message)
        self._kind = ErrorKind(kind)
        self._public_message = public_message
        self._details = deepcopy(details) if details is not None else None
        self._internal_message = internal_message

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def public_message(self) -> str:
        return self._public_message

    @property
    def details(self) -> Details | None:
        return deepcopy(self._details)

    @property
    def internal_message(self) -> str | None:
        return self._internal_message

    def __str__(self) -> str:
        # logs / tests only; internal text never reaches a response body
        if self._internal_message:
            return f"{self._public_message} ({self._kind.value}: {self._internal_message})"
        return f"{self._public_message} ({self._kind.value})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind.value!r}, public_message={self._public_message!r})"

    def to_payload(self) -> dict[str, Any]:
        """
        Return the JSON-serializable body for HTTP responses:

            {"error": "...", "details": {...} | [...], "type": "DUPLICITY"}

        `details` is omitted when there are none; `internal_message` is never included.
        """
        payload: dict[str, Any] = {"error": self._public_message}
        if self._details is not None:
            payload["details"] = deepcopy(self._details)
        payload["type"] = self._kind.value
        return payload

    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self._kind]


class DuplicityError(PortfolioError):
    def __init__(self, public_message: str, details: Details | None = None, internal_message: str | None = None):
        super().__init__(ErrorKind.DUPLICITY, public_message, details, internal_message)


class ValidationError(PortfolioError):
    def __init__(self, public_message: str, details: Details | None = None, internal_message: str | None = None):
        super().__init__(ErrorKind.VALIDATION, public_message, details, internal_message)


class CredentialsError(PortfolioError):
    def __init__(self, public_message: str = "Invalid credentials", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.CREDENTIALS, public_message, details, internal_message)


class NotFoundError(PortfolioError):
    def __init__(self, public_message: str = "Not found", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.NOT_FOUND, public_message, details, internal_message)


class OwnershipError(PortfolioError):
    """Reserved: caller may not act on this particular record."""

    def __init__(self, public_message: str = "Forbidden", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.OWNERSHIP, public_message, details, internal_message)


class SystemFailureError(PortfolioError):
    def __init__(self, public_message: str = "Internal server error", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.SYSTEM, public_message, details, internal_message)


class AuthorizationError(PortfolioError):
    def __init__(self, public_message: str = "Not authorized", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.AUTHORIZATION, public_message, details, internal_message)


class MalformedInputError(PortfolioError):
    def __init__(self, public_message: str = "Malformed request body", details: Details | None = None,
                 internal_message: str | None = None):
        super().__init__(ErrorKind.MALFORMED_INPUT, public_message, details, internal_message)


__all__ = [
    "ErrorKind",
    "HTTP_STATUS_BY_KIND",
    "PortfolioError",
    "DuplicityError",
    "ValidationError",
    "CredentialsError",
    "NotFoundError",
    "OwnershipError",
    "SystemFailureError",
    "AuthorizationError",
    "MalformedInputError",
]
