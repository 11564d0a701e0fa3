from __future__ import annotations

from pylqd._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "vendor": "Acme",
        "unique_id": "ABC-123",
        "push_token": "tok",
        "latitude": 52.0,
        "longitude": 4.0,
        "release_version": 7,
    }

    redacted = redact_for_log(payload)
    assert redacted["unique_id"] == "<redacted>"
    assert redacted["push_token"] == "<redacted>"
    assert redacted["latitude"] == "<redacted>"
    assert redacted["longitude"] == "<redacted>"
    assert redacted["vendor"] == "Acme"
    assert redacted["release_version"] == 7


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
