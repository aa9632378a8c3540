from __future__ import annotations

from types import SimpleNamespace

import pytest

from taskdeck.infrastructure.backend_error_mapper import classify, classify_network
from taskdeck.infrastructure.connectivity import is_online, set_online
from taskdeck.shared.errors import ErrorKind


@pytest.mark.parametrize(
    "raw",
    [
        {"code": "PGRST301", "message": "expired"},
        {"message": "JWT expired"},
        {"code": "23505", "message": "invalid JWT"},
        SimpleNamespace(message="JWT malformed", code=None),
    ],
)
def test_session_errors(raw) -> None:
    assert classify(raw).kind is ErrorKind.SESSION_EXPIRED


def test_jwt_match_is_case_sensitive() -> None:
    error = classify({"message": "jwt expired"})
    assert error.kind is ErrorKind.APPLICATION
    assert error.status_code == 500


@pytest.mark.parametrize("message", [None, "duplicate key value", "whatever"])
def test_unique_violation_is_duplicate_record(message) -> None:
    error = classify({"code": "23505", "message": message})
    assert error.kind is ErrorKind.DUPLICATE_RECORD
    assert error.status_code == 409
    assert error.message == "This record already exists"


def test_foreign_key_violation() -> None:
    error = classify({"code": "23503", "message": "violates foreign key constraint"})
    assert (error.kind, error.status_code) == (ErrorKind.APPLICATION, 400)
    assert error.message == "Cannot delete: related records exist"


def test_no_rows() -> None:
    error = classify({"code": "PGRST116"})
    assert (error.status_code, error.message) == (404, "Record not found")


def test_row_level_security() -> None:
    error = classify({"code": "42501", "message": "new row violates row-level security policy"})
    assert error.status_code == 403
    assert error.message.startswith("You do not have permission")


@pytest.mark.parametrize("message", ["Failed to fetch", "network unreachable"])
def test_transport_messages_are_network(message: str) -> None:
    assert classify({"message": message}).kind is ErrorKind.NETWORK


def test_default_keeps_raw_message() -> None:
    error = classify({"code": "XX000", "message": "disk full"})
    assert (error.kind, error.status_code, error.message) == (
        ErrorKind.APPLICATION,
        500,
        "disk full",
    )


def test_missing_message_is_substituted() -> None:
    for raw in (None, {}, {"code": "XX000"}, object()):
        assert classify(raw).message == "Database operation failed"


def test_exception_input_uses_its_text() -> None:
    assert classify(RuntimeError("connection lost: network down")).kind is ErrorKind.NETWORK


def test_rules_are_ordered() -> None:
    # session rule wins over the network rule
    assert classify({"message": "JWT fetch failed"}).kind is ErrorKind.SESSION_EXPIRED
    # code rules win over message rules
    assert classify({"code": "PGRST116", "message": "network"}).status_code == 404


def test_classify_network_offline() -> None:
    error = classify_network(TimeoutError("timeout"), is_online=lambda: False)
    assert error.kind is ErrorKind.OFFLINE
    assert error.status_code == 503


def test_classify_network_uses_host_flag() -> None:
    set_online(False)
    assert not is_online()
    assert classify_network(ConnectionError("refused")).kind is ErrorKind.OFFLINE
    set_online(True)
    assert classify_network(ConnectionError("refused")).kind is ErrorKind.NETWORK


@pytest.mark.parametrize(
    "raw",
    [
        TimeoutError(),
        {"name": "TimeoutError"},
        {"name": "AbortError", "message": "request timeout exceeded"},
    ],
)
def test_classify_network_timeout(raw) -> None:
    error = classify_network(raw, is_online=lambda: True)
    assert error.kind is ErrorKind.TIMEOUT
    assert error.status_code == 408


def test_classify_network_default() -> None:
    assert classify_network({"message": "reset"}, is_online=lambda: True).kind is ErrorKind.NETWORK
    assert classify_network(None, is_online=lambda: True).kind is ErrorKind.NETWORK
