from core.logging import LoggerRegistry, _censor_sensitive_keys, generate_correlation_id, validation_logger


def test_field_values_are_redacted():
    event = {"event": "field_rejected", "field": "name", "value": "secret stuff", "nested": [{"token": "abc"}]}
    redacted = _censor_sensitive_keys(None, "info", event)
    assert redacted["value"] == "[REDACTED]"
    assert redacted["nested"] == [{"token": "[REDACTED]"}]
    assert redacted["field"] == "name"


def test_registry_returns_the_same_logger():
    assert validation_logger() is LoggerRegistry.get("validation")


def test_correlation_ids_are_short_and_unique():
    ids = {generate_correlation_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(len(i) == 8 for i in ids)
