import logging

from sqlalchemy.exc import OperationalError

from authgate.auth.credentials import verify_credentials
from authgate.auth.registration import register_user
from authgate.auth.results import Failure


def _register(store, email="ana@x.com", password="abcdef"):
    result = register_user(store, "Ana", email, password)
    assert result.ok
    return result.user


def test_register_then_login_round_trip(store):
    user = _register(store)
    result = verify_credentials(store, "ana@x.com", "abcdef")
    assert result.ok
    assert result.user.id == user.id
    assert result.user.to_dict().keys() == {"id", "name", "email", "created_at"}


def test_login_uses_normalized_email(store):
    user = _register(store, email="ana@X.COM")
    result = verify_credentials(store, " ana@x.com ", "abcdef")
    assert result.ok
    assert result.user.id == user.id


def test_unknown_email_and_wrong_password_look_the_same(store):
    _register(store)
    unknown = verify_credentials(store, "nobody@x.com", "abcdef")
    wrong = verify_credentials(store, "ana@x.com", "abcdeg")

    assert unknown.failure is Failure.NOT_FOUND
    assert wrong.failure is Failure.BAD_PASSWORD
    assert unknown.message == wrong.message == "Invalid credentials"
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.errors == wrong.errors == {}


def test_failure_reason_is_logged(store, caplog):
    _register(store)
    with caplog.at_level(logging.INFO, logger="authgate"):
        verify_credentials(store, "nobody@x.com", "abcdef")
        verify_credentials(store, "ana@x.com", "abcdeg")
    text = caplog.text
    assert "no user for nobody@x.com" in text
    assert "bad password" in text
    assert "abcde" not in text


def test_short_password_is_invalid_input(store):
    _register(store)
    result = verify_credentials(store, "ana@x.com", "abcde")
    assert result.failure is Failure.INVALID_INPUT
    assert "password" in result.errors
    assert result.status_code == 400


def test_store_error_is_internal(store, monkeypatch):
    def boom(email):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(store, "find_by_email", boom)
    result = verify_credentials(store, "ana@x.com", "abcdef")
    assert result.failure is Failure.INTERNAL
    assert result.message == "Internal server error"
    assert result.user is None


def test_hasher_work_factor_comes_from_environment():
    import os

    from authgate.auth import passwords

    assert passwords._PH.time_cost == int(os.environ["AUTHGATE_HASH_TIME_COST"])
    assert passwords._PH.memory_cost == int(os.environ["AUTHGATE_HASH_MEMORY_COST"])
