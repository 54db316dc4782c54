"""
CampusHub Backend — Password Hashing Unit Tests
=================================================

What we test:
    ✅ Hashes are argon2id PHC strings with a fresh salt each time
    ✅ Verification accepts the right password and rejects everything else
    ✅ Malformed stored hashes fail closed instead of raising
    ✅ Blank passwords are never hashed
"""

import pytest

from campushub.auth.passwords import hash_password, verify_dummy, verify_password


class TestHashPassword:

    def test_hash_is_argon2id(self):
        assert hash_password("p1").startswith("$argon2id$")

    def test_same_password_gets_different_salts(self):
        assert hash_password("p1") != hash_password("p1")

    def test_hash_does_not_contain_plaintext(self):
        assert "correct-horse" not in hash_password("correct-horse")

    def test_blank_password_rejected(self):
        with pytest.raises(ValueError):
            hash_password("")


class TestVerifyPassword:

    def test_correct_password(self):
        stored = hash_password("p1")
        assert verify_password(stored, "p1") is True

    def test_wrong_password(self):
        stored = hash_password("p1")
        assert verify_password(stored, "p2") is False

    def test_single_character_difference(self):
        stored = hash_password("secret-password")
        assert verify_password(stored, "secret-passwore") is False

    def test_garbage_hash_fails_closed(self):
        assert verify_password("not-a-hash", "p1") is False

    def test_empty_inputs(self):
        assert verify_password("", "p1") is False
        assert verify_password(hash_password("p1"), "") is False

    def test_dummy_never_matches(self):
        assert verify_dummy("campushub-unknown-user") is False
        assert verify_dummy("") is False
        assert verify_dummy(None) is False
