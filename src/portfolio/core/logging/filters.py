"""
Logging filters.

  - RequestIdFilter: guarantees `record.request_id` (explicit extra, else the
    contextvar set by RequestIDMiddleware, else "-").
  - RedactFilter: masks sensitive extras such as passwords and tokens,
    including keys nested inside dict extras.
"""

import contextvars
import logging
from logging import LogRecord
from typing import Any

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; returns the token for reset_request_id()."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "accesstoken",
        "refresh_token",
        "authorization",
        "jwt_secret",
    }

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: REDACTED if str(k).lower() in self.SENSITIVE else self._scrub(v)
                for k, v in value.items()
            }
        return value

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            elif isinstance(record.__dict__[key], dict):
                record.__dict__[key] = self._scrub(record.__dict__[key])
        return True
