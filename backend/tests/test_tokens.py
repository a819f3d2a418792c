"""Tests for session and password reset tokens."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from jobboard.services.errors import TokenExpiredError, TokenInvalidError
from jobboard.services.tokens import TokenService


SESSION_SECRET = "session-secret-for-tests"
RESET_SECRET = "reset-secret-for-tests"


@pytest.fixture
def service():
    return TokenService(SESSION_SECRET, RESET_SECRET)


class Account:
    """Minimal stand-in carrying the attributes a session token embeds."""

    def __init__(self, id=7, name="jane doe", email="jane@example.com", role="USER"):
        self.id = id
        self.name = name
        self.email = email
        self.role = role


class TestTokenServiceSetup:
    def test_identical_secrets_rejected(self):
        with pytest.raises(ValueError):
            TokenService("same-secret", "same-secret")

    def test_default_lifetimes(self, service):
        assert service.session_ttl == timedelta(hours=12)
        assert service.reset_ttl == timedelta(minutes=20)


class TestSessionTokens:
    def test_round_trip_identity(self, service):
        token = service.issue_session_token(Account(), "user")
        identity = service.decode_session_token(token)

        assert identity.id == 7
        assert identity.name == "jane doe"
        assert identity.email == "jane@example.com"
        assert identity.role == "USER"
        assert identity.kind == "user"

    def test_business_kind_is_carried(self, service):
        token = service.issue_session_token(Account(role="BUSINESS"), "business")
        assert service.decode_session_token(token).kind == "business"

    def test_payload_never_contains_password_material(self, service):
        account = Account()
        account.password_hash = "$2b$10$secret"
        token = service.issue_session_token(account, "user")

        claims = jwt.get_unverified_claims(token)
        assert "password_hash" not in claims
        assert "$2b$10$secret" not in str(claims)

    def test_valid_just_before_expiry(self, service):
        issued = datetime.now(timezone.utc) - timedelta(hours=11, minutes=59)
        token = service.issue_session_token(Account(), "user", now=issued)
        assert service.decode_session_token(token).id == 7

    def test_expired_after_twelve_hours(self, service):
        issued = datetime.now(timezone.utc) - timedelta(hours=12, minutes=1)
        token = service.issue_session_token(Account(), "user", now=issued)
        with pytest.raises(TokenExpiredError):
            service.decode_session_token(token)

    def test_tampered_token_rejected(self, service):
        header, _, signature = service.issue_session_token(Account(), "user").split(".")
        _, other_payload, _ = service.issue_session_token(Account(id=8), "user").split(".")
        with pytest.raises(TokenInvalidError):
            service.decode_session_token(f"{header}.{other_payload}.{signature}")

    def test_garbage_rejected(self, service):
        with pytest.raises(TokenInvalidError):
            service.decode_session_token("not.a.jwt")

    def test_signed_with_other_secret_rejected(self, service):
        other = TokenService("another-session-secret", "another-reset-secret")
        token = other.issue_session_token(Account(), "user")
        with pytest.raises(TokenInvalidError):
            service.decode_session_token(token)


class TestResetTokens:
    def test_round_trip_account_id(self, service):
        token = service.issue_reset_token(42)
        assert service.verify_reset_token(token) == 42

    def test_valid_just_before_expiry(self, service):
        issued = datetime.now(timezone.utc) - timedelta(minutes=19)
        token = service.issue_reset_token(42, now=issued)
        assert service.verify_reset_token(token) == 42

    def test_expired_after_twenty_minutes(self, service):
        issued = datetime.now(timezone.utc) - timedelta(minutes=21)
        token = service.issue_reset_token(42, now=issued)
        with pytest.raises(TokenExpiredError):
            service.verify_reset_token(token)


class TestTokenKindsAreNotInterchangeable:
    def test_session_token_is_not_a_reset_token(self, service):
        token = service.issue_session_token(Account(), "user")
        with pytest.raises(TokenInvalidError):
            service.verify_reset_token(token)

    def test_reset_token_is_not_a_session_token(self, service):
        token = service.issue_reset_token(7)
        with pytest.raises(TokenInvalidError):
            service.decode_session_token(token)

    def test_type_claim_is_checked_even_with_matching_secret(self, service):
        """A reset-shaped token signed with the session secret is still refused."""
        now = datetime.now(timezone.utc)
        forged = jwt.encode(
            {"sub": "7", "typ": "reset", "iat": now, "exp": now + timedelta(minutes=5)},
            SESSION_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(TokenInvalidError):
            service.decode_session_token(forged)
