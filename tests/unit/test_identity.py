"""
Unit tests for credentials: password hashing, JWT tokens, password-change epoch.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token, get_password_hash, verify_password, verify_token
from app.domains.identity.entities import User


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = get_password_hash("Secret123")
        assert hashed != "Secret123"
        assert verify_password("Secret123", hashed)
        assert not verify_password("Wrong123", hashed)

    def test_user_authenticate(self):
        user = User.create_user(email="a@example.com", username="alice", password="Secret123")
        assert user.authenticate("Secret123")
        assert not user.authenticate("secret123")


class TestTokens:

    def test_token_contains_sub_iat_exp(self):
        token = create_access_token({"sub": "abc"})
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        assert payload["sub"] == "abc"
        assert "iat" in payload
        assert payload["exp"] > payload["iat"]

    def test_verify_valid_token(self):
        token = create_access_token({"sub": "abc"})
        assert verify_token(token)["sub"] == "abc"

    def test_verify_expired_token(self):
        token = create_access_token({"sub": "abc"}, expires_delta=timedelta(seconds=-10))
        assert verify_token(token) is None

    def test_verify_tampered_token(self):
        token = jwt.encode({"sub": "abc"}, "another-secret", algorithm="HS256")
        assert verify_token(token) is None


class TestPasswordChangeEpoch:

    def test_never_changed(self):
        user = User.create_user(email="a@example.com", username="alice", password="Secret123")
        assert user.is_password_changed(0) is False

    def test_token_issued_before_change(self):
        user = User.create_user(email="a@example.com", username="alice", password="Secret123")
        issued_at = int(datetime.now(timezone.utc).timestamp()) - 60
        user.set_password("Another123")
        assert user.is_password_changed(issued_at) is True

    def test_token_issued_after_change(self):
        user = User.create_user(email="a@example.com", username="alice", password="Secret123")
        user.set_password("Another123")
        issued_at = int(datetime.now(timezone.utc).timestamp()) + 60
        assert user.is_password_changed(issued_at) is False
        assert user.authenticate("Another123")

    def test_naive_timestamp_treated_as_utc(self):
        user = User.create_user(email="a@example.com", username="alice", password="Secret123")
        user.password_changed_at = datetime(2030, 1, 1, 12, 0, 0)
        changed = int(datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc).timestamp())
        assert user.is_password_changed(changed - 1) is True
        assert user.is_password_changed(changed) is False
