# src/portfolio/tests/test_logging/test_filters.py
import logging

from portfolio.core.logging.filters import (
    REDACTED,
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_request_id_filter_defaults_to_dash():
    rec = make_record()
    # ensure no request id set in context
    token = set_request_id(None)
    try:
        f = RequestIdFilter()
        assert f.filter(rec) is True
        assert rec.request_id == "-"  # fallback sentinel
    finally:
        reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    rec = make_record()
    token = set_request_id("abc-123")
    try:
        RequestIdFilter().filter(rec)
        assert rec.request_id == "abc-123"
    finally:
        reset_request_id(token)


def test_request_id_filter_respects_record_extra():
    rec = make_record()
    rec.request_id = "explicit"
    token = set_request_id("context-id")
    try:
        RequestIdFilter().filter(rec)
        # record.request_id keeps the explicit value
        assert rec.request_id == "explicit"
    finally:
        reset_request_id(token)


def test_reset_restores_previous_value():
    outer = set_request_id("outer")
    inner = set_request_id("inner")
    reset_request_id(inner)
    assert get_request_id() == "outer"
    reset_request_id(outer)


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.password = "hunter2"
    rec.Authorization = "Bearer abc"
    rec.entity = "admin"
    assert RedactFilter().filter(rec) is True
    assert rec.password == REDACTED
    assert rec.Authorization == REDACTED
    assert rec.entity == "admin"


def test_redact_filter_masks_nested_keys():
    rec = make_record()
    rec.payload = {"username": "Site Admin", "credentials": {"password": "hunter2", "token": "t"}}
    RedactFilter().filter(rec)
    assert rec.payload["username"] == "Site Admin"
    assert rec.payload["credentials"] == {"password": REDACTED, "token": REDACTED}
