"""Tests for the NoodleError hierarchy — codes, statuses and REST envelope."""

from noodles.core.errors import (
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    PersistenceError,
    SelfGrantError,
)


def test_business_error_envelope():
    err = SelfGrantError(ErrorContext(sender_id="s1", group_id="g1"))
    body = err.to_response()["error"]
    assert body["code"] == "SELF_GRANT"
    assert body["category"] == ErrorCategory.BUSINESS_RULE.value
    assert body["recoverable"] is True
    assert body["context"]["sender_id"] == "s1"
    assert err.http_status == 400


def test_persistence_error_is_critical_and_not_recoverable():
    err = PersistenceError("Connection or operational error", "execute")
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.http_status == 503
    assert not err.recoverable
    assert err.operation == "execute"
    assert err.to_response()["error"]["code"] == "PERSISTENCE_ERROR"


def test_user_message_overrides_message_in_envelope():
    err = PersistenceError("boom", "query", ErrorContext(user_message="Try again later."))
    assert err.to_response()["error"]["message"] == "Try again later."
