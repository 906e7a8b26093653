"""Unit tests for structlog processors."""

from subject_mailer.logging_config import (
    MAX_FIELD_LENGTH,
    REDACTED,
    app_context,
    configure_logging,
    redact_secrets,
    truncate_long_values,
)


def test_app_context_stamps_events():
    processor = app_context("subject-mailer", "test")

    event = processor(None, "info", {"event": "hello"})

    assert event["app"] == "subject-mailer"
    assert event["env"] == "test"


def test_redact_secrets_masks_credential_fields():
    event = redact_secrets(None, "info", {"event": "x", "Authorization": "Bearer gsk_1", "api_key": "gsk_1", "model": "m"})

    assert event["Authorization"] == REDACTED
    assert event["api_key"] == REDACTED
    assert event["model"] == "m"


def test_truncate_long_values():
    long_text = "a" * (MAX_FIELD_LENGTH + 10)

    event = truncate_long_values(None, "info", {"event": long_text, "content": long_text, "n": 5})

    assert event["event"] == long_text
    assert event["content"].startswith("a" * MAX_FIELD_LENGTH)
    assert event["content"].endswith(f"[{len(long_text)} chars]")
    assert event["n"] == 5


def test_configure_logging_in_both_modes():
    configure_logging("DEBUG", "production")
    configure_logging("INFO", "development")
