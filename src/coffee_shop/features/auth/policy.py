"""Route level authorization.

``ROUTE_POLICY`` is an ordered list of rules evaluated top to bottom; the first
rule matching the request method and path decides which roles may proceed.
Patterns use ``*`` to match exactly one path segment. The policy looks at roles
only. Whether the caller owns the addressed resource is checked by the
services.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from ...core.config import API_V1_PREFIX
from ..users.models import Role, ALL_ROLES, ELEVATED_ROLES
from .gate import AuthContext

logger = logging.getLogger(__name__)

PUBLIC = None
USER_ONLY = frozenset({Role.USER})
SUPER_ONLY = frozenset({Role.SUPER})


@dataclass(frozen=True)
class Rule:
    method: str
    pattern: str
    roles: Optional[frozenset]  # None marks a public route

    def matches(self, method: str, path: str) -> bool:
        return self.method == method and _path_matches(self.pattern, path)


def _rule(method: str, path: str, roles: Optional[frozenset]) -> Rule:
    return Rule(method, f"{API_V1_PREFIX}{path}", roles)


ROUTE_POLICY: tuple[Rule, ...] = (
    # Public
    _rule("POST", "/users/register", PUBLIC),
    _rule("POST", "/users/login", PUBLIC),
    Rule("GET", "/", PUBLIC),
    Rule("GET", "/docs", PUBLIC),
    Rule("GET", "/docs/oauth2-redirect", PUBLIC),
    Rule("GET", "/redoc", PUBLIC),
    Rule("GET", "/openapi.json", PUBLIC),
    # Users
    _rule("PATCH", "/users/changeRole", SUPER_ONLY),
    _rule("GET", "/users", ELEVATED_ROLES),
    _rule("GET", "/users/*", ALL_ROLES),
    _rule("DELETE", "/users/*", SUPER_ONLY),
    _rule("PUT", "/users/*", ALL_ROLES),
    # Products
    _rule("POST", "/products", ELEVATED_ROLES),
    _rule("GET", "/products", ALL_ROLES),
    _rule("GET", "/products/*", ALL_ROLES),
    _rule("PATCH", "/products/*", ELEVATED_ROLES),
    _rule("DELETE", "/products/*", SUPER_ONLY),
    # Orders
    _rule("POST", "/orders", USER_ONLY),
    _rule("GET", "/orders/history", ALL_ROLES),
    _rule("GET", "/orders", ELEVATED_ROLES),
    _rule("GET", "/orders/*", ALL_ROLES),
    _rule("PATCH", "/orders/*", ELEVATED_ROLES),
    _rule("DELETE", "/orders/*", SUPER_ONLY),
)


def _split(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _path_matches(pattern: str, path: str) -> bool:
    pattern_parts = _split(pattern)
    path_parts = _split(path)
    if len(pattern_parts) != len(path_parts):
        return False
    return all(p == "*" or p == s for p, s in zip(pattern_parts, path_parts))


def find_rule(method: str, path: str, rules: tuple[Rule, ...] = ROUTE_POLICY) -> Optional[Rule]:
    method = method.upper()
    for rule in rules:
        if rule.matches(method, path):
            return rule
    return None


def authorize(method: str, path: str, ctx: AuthContext, rules: tuple[Rule, ...] = ROUTE_POLICY) -> None:
    """Raises 401/403 when ``ctx`` may not call ``method path``.

    Public routes always pass. Every other route needs an identity; a matched
    rule additionally needs the caller's role to be in its role set, while an
    unmatched route only needs the identity.
    """
    rule = find_rule(method, path, rules)
    if rule is not None and rule.roles is PUBLIC:
        return

    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if rule is not None and ctx.role not in rule.roles:
        logger.info(f"Denied {method} {path} for {ctx.email} with role {ctx.role.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )
