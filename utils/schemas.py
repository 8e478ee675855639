"""
Pydantic request / response schemas for the HTTP surface.
"""

from __future__ import annotations

from pydantic import BaseModel


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class Credentials(BaseModel):
    """Body of both ``/register`` and ``/login``."""

    username: str
    password: str


class TokenResponse(BaseModel):
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreateRequest(BaseModel):
    text: str


# ═══════════════════════════════════════════════════════════════════════════════
# Shared
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    message: str
