"""Authentication gate: turns the Authorization header into an AuthContext.

The gate is pure computation. It never touches the database; it only checks
the token signature and expiry and reads the identity and role claims.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from ..users.models import Role, ELEVATED_ROLES
from . import security

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller for the duration of one request."""

    email: Optional[str] = None
    role: Optional[Role] = None

    @property
    def is_authenticated(self) -> bool:
        return self.email is not None

    @property
    def is_elevated(self) -> bool:
        return self.role in ELEVATED_ROLES


ANONYMOUS = AuthContext()


def invalid_token_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate(authorization: Optional[str]) -> AuthContext:
    """Resolves the caller from an ``Authorization`` header value.

    A missing header, or one that is not a bearer credential, yields the
    anonymous context. A bearer token that fails verification raises a 401.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return ANONYMOUS

    token = authorization[len(BEARER_PREFIX):]
    if not security.verify_token(token):
        raise invalid_token_exception()

    email = security.get_email_from_token(token)
    role_claim = security.get_role_from_token(token)
    try:
        role = Role(role_claim)
    except ValueError:
        logger.warning(f"Token for {email} carries unknown role {role_claim!r}")
        raise invalid_token_exception()
    return AuthContext(email=email, role=role)
