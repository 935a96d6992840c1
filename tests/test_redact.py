from __future__ import annotations

from pyskybitz._redact import redact_for_log


def test_redact_for_log_redacts_credentials() -> None:
    params = {
        "assetid": "H03036",
        "customer": "acme",
        "password": "s3cret",
        "version": "2.76",
        "nested": {"Password": "again"},
    }

    redacted = redact_for_log(params)
    assert redacted["assetid"] == "H03036"
    assert redacted["customer"] == "<redacted>"
    assert redacted["password"] == "<redacted>"
    assert redacted["nested"]["Password"] == "<redacted>"
    assert params["password"] == "s3cret"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_handles_sequences_and_bytes() -> None:
    redacted = redact_for_log([{"password": "pw"}, b"abc", 3])
    assert redacted == [{"password": "<redacted>"}, "<bytes:3b>", 3]
