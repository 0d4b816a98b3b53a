"""Password hashing tests (bcrypt with SHA-256 pre-hash)."""

from app.infrastructure.security.password import get_password_hash, verify_password


def test_hash_verifies_only_the_same_password() -> None:
    hashed = get_password_hash("Sprint@Plan2024")
    assert hashed != "Sprint@Plan2024"
    assert verify_password("Sprint@Plan2024", hashed)
    assert not verify_password("sprint@plan2024", hashed)


def test_same_password_gets_a_fresh_salt() -> None:
    assert get_password_hash("Sprint@Plan2024") != get_password_hash("Sprint@Plan2024")


def test_long_passwords_are_not_truncated() -> None:
    base = "A1@" + "x" * 80
    hashed = get_password_hash(base + "tail-one")
    assert not verify_password(base + "tail-two", hashed)


def test_malformed_hash_is_a_mismatch() -> None:
    assert verify_password("Sprint@Plan2024", "not-a-bcrypt-hash") is False
