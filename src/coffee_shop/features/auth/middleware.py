"""Per-request authentication and authorization pipeline."""
import logging

from fastapi import HTTPException, Request

from ...common.schemas import envelope
from .gate import AuthContext, ANONYMOUS, authenticate
from .policy import authorize

logger = logging.getLogger(__name__)


async def auth_pipeline(request: Request, call_next):
    """Runs the gate then the policy before the request reaches a router.

    The resolved AuthContext is kept on ``request.state.auth`` and handed to
    the services through the ``get_auth_context`` dependency.
    """
    try:
        ctx = authenticate(request.headers.get("Authorization"))
        authorize(request.method, request.url.path, ctx)
    except HTTPException as e:
        response = envelope(e.status_code, str(e.detail))
        if e.headers:
            response.headers.update(e.headers)
        return response

    request.state.auth = ctx
    return await call_next(request)


def get_auth_context(request: Request) -> AuthContext:
    return getattr(request.state, "auth", ANONYMOUS)
