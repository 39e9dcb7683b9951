"""Tests for password hashing utilities."""

from chatop.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2_hash(self):
        hashed = hash_password("Passw0rd!")
        assert hashed.startswith("$argon2id$")
        assert "Passw0rd!" not in hashed

    def test_hash_password_different_for_same_input(self):
        assert hash_password("Passw0rd!") != hash_password("Passw0rd!")


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        assert verify_password("Passw0rd!", hash_password("Passw0rd!")) is True

    def test_verify_password_incorrect(self):
        assert verify_password("WrongPassword", hash_password("Passw0rd!")) is False

    def test_verify_password_case_sensitive(self):
        assert verify_password("passw0rd!", hash_password("Passw0rd!")) is False

    def test_malformed_hash_returns_false(self):
        assert verify_password("Passw0rd!", "not-a-hash") is False
        assert verify_password("Passw0rd!", "") is False

    def test_dummy_hash_never_matches_user_input(self):
        assert verify_password("Passw0rd!", DUMMY_PASSWORD_HASH) is False


def test_fresh_hash_does_not_need_rehash():
    assert needs_rehash(hash_password("Passw0rd!")) is False
