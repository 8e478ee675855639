"""
Auth API routes — register, login.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_credential_store, get_token_service
from api.errors import BadRequest, InvalidCredentials
from auth.credentials import CredentialStore
from auth.jwt import TokenService
from utils.schemas import Credentials, MessageResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    summary="Register a new user",
)
async def register(
    req: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
) -> Dict[str, Any]:
    """Create the user. Does not log in; call ``/login`` for a token."""
    try:
        await credentials.register(req.username, req.password)
    except ValueError as exc:
        # bcrypt refuses passwords longer than 72 bytes
        raise BadRequest(f"Password rejected: {exc}")
    return {"message": "User registered"}


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in and obtain a JWT token",
    responses={401: {"model": MessageResponse}},
)
async def login(
    req: Credentials,
    credentials: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Exchange username + password for a bearer token valid for one hour."""
    user = await credentials.authenticate(req.username, req.password)
    if user is None:
        raise InvalidCredentials()

    token = tokens.issue(user.id)
    logger.info("Login: %s (%d)", user.username, user.id)
    return {"token": token}
