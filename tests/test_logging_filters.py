"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from app.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    hash_identifier,
    set_request_id,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_api_keys():
    """Ensure SensitiveDataFilter redacts API key fields."""

    logger, stream = _capture("test_redaction")

    logger.info(
        "test_event",
        extra={
            "api_key": "sk-secret-123",
            "authorization": "Bearer another-secret",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()

    assert "sk-secret-123" not in output
    assert "another-secret" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_dream_content_and_owner():
    """Dream narratives, owner ids and raw coordinates never reach the sink."""

    logger, stream = _capture("test_dream_redaction")

    logger.info(
        "dream_event",
        extra={
            "dream_text": "I dreamed of my neighbour's house on fire",
            "interpretation": "You fear losing stability",
            "owner_id": "0b7c1e9a-owner",
            "raw_lat": 51.50735,
            "raw_lng": -0.12776,
            "char_count": 42,
        },
    )

    output = stream.getvalue()

    assert "neighbour" not in output
    assert "stability" not in output
    assert "0b7c1e9a-owner" not in output
    assert "51.50735" not in output
    assert "-0.12776" not in output
    assert "char_count" in output


def test_sensitive_filter_allows_safe_fields():
    """Verify safe fields pass through unmodified."""

    logger, stream = _capture("test_safe_fields")

    logger.info(
        "safe_event",
        extra={
            "route": "/v1/regions/themes",
            "status": 200,
            "duration_ms": 150.5,
            "owner_hash": hash_identifier("someone"),
        },
    )

    output = stream.getvalue()

    assert "/v1/regions/themes" in output
    assert "200" in output
    assert hash_identifier("someone") in output
    assert "[REDACTED]" not in output


def test_sensitive_filter_redacts_nested_dicts():
    """Ensure nested sensitive fields are redacted."""

    logger, stream = _capture("test_nested")

    logger.info(
        "nested_event",
        extra={
            "headers": {
                "x-owner-id": "secret-owner",
                "user-agent": "pytest",
            },
            "payload": [{"text": "a secret dream"}, {"count": 5}],
        },
    )

    output = stream.getvalue()

    assert "secret-owner" not in output
    assert "a secret dream" not in output
    assert "[REDACTED]" in output
    assert "pytest" in output


def test_request_id_is_attached_from_context():
    logger, stream = _capture("test_request_id")

    set_request_id("req-abc")
    try:
        logger.info("with_context")
    finally:
        clear_request_id()

    payload = json.loads(stream.getvalue().strip())
    assert payload["request_id"] == "req-abc"
    assert payload["message"] == "with_context"
    assert payload["level"] == "info"


def test_hash_identifier_is_stable_and_short():
    assert hash_identifier("owner-1") == hash_identifier("owner-1")
    assert hash_identifier("owner-1") != hash_identifier("owner-2")
    assert len(hash_identifier("owner-1")) == 16
