"""
Auth gate for protected routers.

Used as a router-level dependency: a request only reaches the handler if
it carries `Authorization: Bearer <token>` and the token verifies. The
verified claims are left on request.state.claims for handlers that care
who is calling. The gate never reads or writes records.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from staffing_api.errors import TokenExpired, Unauthorized
from staffing_api.tokens import Claims, TokenService, get_token_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_credential(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Claims:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpired:
        raise _unauthorized("Token has expired")
    except Unauthorized as e:
        logger.info("Rejected token on %s %s: %s", request.method, request.url.path, e)
        raise _unauthorized("Invalid token")

    request.state.claims = claims
    return claims
