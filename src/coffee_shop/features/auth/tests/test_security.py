from datetime import datetime, timedelta, timezone

from jose import jwt

from ....core.config import ALGORITHM, SECRET_KEY
from ..security import (
    create_access_token,
    get_email_from_token,
    get_password_hash,
    get_role_from_token,
    verify_password,
    verify_token,
)


# test password hashing and verification
def test_password_hashing():
    password = "Test#pass1"
    hashed = get_password_hash(password)
    assert verify_password(password, hashed) is True
    assert verify_password("wrong_password", hashed) is False
    assert hashed != password  # Ensure the hash is not the same as the plain password


# test password hashing consistency
def test_password_hash_consistency():
    password = "Test#pass1"
    hashed1 = get_password_hash(password)
    hashed2 = get_password_hash(password)
    assert hashed1 != hashed2, "Hashing the same password should yield different hash"
    assert verify_password(password, hashed1) is True
    assert verify_password(password, hashed2) is True


# test password hashing with special characters
def test_password_hash_special_characters():
    password = "!@#$%^&*()_+"
    hashed = get_password_hash(password)
    assert verify_password(password, hashed) is True
    assert verify_password("wrong_password", hashed) is False


def test_token_carries_email_and_role():
    token = create_access_token("a@x.com", "ADMIN")
    assert verify_token(token) is True
    assert get_email_from_token(token) == "a@x.com"
    assert get_role_from_token(token) == "ADMIN"


def test_token_expires_two_hours_after_issue():
    token = create_access_token("a@x.com", "USER")
    claims = jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 2 * 60 * 60


def test_expired_token_is_invalid():
    token = create_access_token("a@x.com", "USER", expires_delta=timedelta(seconds=-1))
    assert verify_token(token) is False


def test_token_issued_more_than_two_hours_ago_is_invalid():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2, minutes=1)
    token = jwt.encode(
        {"sub": "a@x.com", "role": "USER", "iat": issued_at, "exp": issued_at + timedelta(hours=2)},
        SECRET_KEY,
        algorithm=ALGORITHM,
    )
    assert verify_token(token) is False


def test_token_signed_with_other_key_is_invalid():
    token = jwt.encode({"sub": "a@x.com", "role": "SUPER"}, "not-the-secret", algorithm=ALGORITHM)
    assert verify_token(token) is False


def test_malformed_token_is_invalid():
    assert verify_token("not-a-token") is False
    assert verify_token("") is False


def test_token_without_subject_is_invalid():
    token = jwt.encode({"role": "USER"}, SECRET_KEY, algorithm=ALGORITHM)
    assert verify_token(token) is False


def test_missing_role_claim_defaults_to_user():
    token = jwt.encode({"sub": "a@x.com"}, SECRET_KEY, algorithm=ALGORITHM)
    assert verify_token(token) is True
    assert get_role_from_token(token) == "USER"
