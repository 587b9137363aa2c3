"""Tests for advisor accounts and the session provider."""

import pytest

from advisor_desk.services.auth import (
    AuthService, SessionProvider, hash_password, verify_password,
)
from advisor_desk.services.errors import AuthenticationError, StoreWriteError


@pytest.fixture
def auth(mongo_db):
    service = AuthService(db=mongo_db)
    service.create_advisor("Coach@Example.com ", "s3cret", name="Coach")
    return service


def test_password_hash_is_salted():
    first, salt_a = hash_password("hunter2")
    second, salt_b = hash_password("hunter2")
    assert salt_a != salt_b
    assert first != second
    assert verify_password("hunter2", first, salt_a)
    assert not verify_password("hunter3", first, salt_a)


def test_verify_with_broken_salt_fails():
    digest, _ = hash_password("pw")
    assert not verify_password("pw", digest, "not-hex")


def test_password_is_not_stored(auth, mongo_db):
    doc = mongo_db.advisors.find_one({"email": "coach@example.com"})
    assert doc["pw_hash"] != "s3cret"
    assert "password" not in doc


def test_authenticate_normalizes_email(auth):
    advisor = auth.authenticate("  COACH@example.com", "s3cret")
    assert advisor.email == "coach@example.com"
    assert advisor.name == "Coach"


@pytest.mark.parametrize("email, password", [
    ("coach@example.com", "wrong"),
    ("nobody@example.com", "s3cret"),
    ("", ""),
])
def test_authenticate_rejects_bad_credentials(auth, email, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(email, password)


def test_duplicate_email_rejected(auth):
    with pytest.raises(StoreWriteError):
        auth.create_advisor("coach@example.com", "other")


def test_blank_credentials_rejected(auth):
    with pytest.raises(ValueError):
        auth.create_advisor("  ", "pw")


class TestSessionProvider:
    """Session lifecycle from app start to sign-out."""

    def test_starts_loading_then_resolves_signed_out(self, auth):
        provider = SessionProvider(auth)
        assert provider.session.loading
        assert not provider.session.is_authenticated

        session = provider.start()
        assert not session.loading
        assert session.user is None

    def test_sign_in_and_out(self, auth):
        provider = SessionProvider(auth)
        provider.start()

        session = provider.sign_in("coach@example.com", "s3cret")
        assert session.is_authenticated
        assert session.user.email == "coach@example.com"
        # a later start keeps the signed-in advisor
        assert provider.start().is_authenticated

        session = provider.sign_out()
        assert not session.is_authenticated
        assert not session.loading

    def test_failed_sign_in_keeps_session(self, auth):
        provider = SessionProvider(auth)
        before = provider.start()
        with pytest.raises(AuthenticationError):
            provider.sign_in("coach@example.com", "nope")
        assert provider.session == before
