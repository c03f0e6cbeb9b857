"""Password hashing and the bearer token service."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from ...core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "USER"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

def get_password_hash(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')


def create_access_token(email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issues a signed token for ``email`` carrying its ``role`` claim.

    The token expires ``ACCESS_TOKEN_EXPIRE_MINUTES`` after issuance unless
    ``expires_delta`` says otherwise.
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _get_claims(token: str) -> dict[str, Any]:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def verify_token(token: str) -> bool:
    """Returns True when the signature checks out and the token is unexpired."""
    try:
        claims = _get_claims(token)
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return False
    if not claims.get("sub"):
        logger.warning("Token sub (email) is missing.")
        return False
    return True


def get_email_from_token(token: str) -> str:
    return _get_claims(token)["sub"]


def get_role_from_token(token: str) -> str:
    return _get_claims(token).get("role") or DEFAULT_ROLE
