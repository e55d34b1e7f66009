"""Tests for password hashing."""

from __future__ import annotations

from agencyportal.core.auth.password import hash_password, verify_password


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test_hash_is_not_plaintext(self) -> None:
        """Hash never equals the password."""
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert hashed.startswith("$2")

    def test_hashes_are_salted(self) -> None:
        """Same password hashes differently each time."""
        assert hash_password("s3cret!") != hash_password("s3cret!")

    def test_verify_correct_password(self, test_password_hash: str) -> None:
        """Correct password verifies."""
        assert verify_password("correct-horse", test_password_hash) is True

    def test_verify_wrong_password(self, test_password_hash: str) -> None:
        """Wrong password does not verify."""
        assert verify_password("battery-staple", test_password_hash) is False

    def test_user_without_password_never_matches(self) -> None:
        """A missing hash rejects every password."""
        assert verify_password("anything", None) is False
        assert verify_password("", None) is False

    def test_empty_password_never_matches(self, test_password_hash: str) -> None:
        """An empty password is rejected."""
        assert verify_password("", test_password_hash) is False
