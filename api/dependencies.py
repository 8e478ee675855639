"""
FastAPI dependencies (shared across routes).

The stores and the token service are created per application and kept on
``app.state``; routes reach them only through these accessors.
"""

from __future__ import annotations

from fastapi import Request

from auth.credentials import CredentialStore
from auth.jwt import TokenService
from database.stores import TaskStore


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.tasks


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens
