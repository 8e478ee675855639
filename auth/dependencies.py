"""
FastAPI dependencies for authentication.

``get_current_user_id`` is the auth gate for every protected route:

* no ``Authorization`` header          -> 403 ``MissingToken``
* header present but not a valid token -> 401 ``InvalidToken``
* valid token                          -> the authenticated user id
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from api.dependencies import get_token_service
from api.errors import InvalidToken, MissingToken
from auth.jwt import InvalidSignature, TokenService

logger = logging.getLogger(__name__)

_authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer <token>",
)


def extract_bearer_token(authorization: str) -> str:
    """Return the second whitespace-separated segment of the header."""
    parts = authorization.split()
    if len(parts) < 2:
        raise InvalidSignature("malformed authorization header")
    return parts[1]


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Depends(_authorization_header),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id. The id is also left on ``request.state`` for request logging.
    """
    if not authorization:
        raise MissingToken()
    try:
        token = extract_bearer_token(authorization)
    except InvalidToken as exc:
        logger.info("Rejected token: %s (%s)", exc.reason, type(exc).__name__)
        raise
    user_id = await tokens.verify(token)
    request.state.user_id = user_id
    return user_id
