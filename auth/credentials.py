"""
Credential store — user registration and password checks.

Hashing runs in a worker thread so a slow bcrypt round only suspends the
request that asked for it. The store mutation happens after hashing, in one
synchronous step.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from database.models import User
from database.stores import UserStore

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, users: UserStore, rounds: int = DEFAULT_ROUNDS):
        self._users = users
        self._rounds = rounds

    async def register(self, username: str, password: str) -> User:
        password_hash = await asyncio.to_thread(hash_password, password, self._rounds)
        user = self._users.add(username, password_hash)
        logger.info("Registered user %s (%d)", username, user.id)
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        return self._users.find_by_username(username)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(verify_password, password, password_hash)

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when both lookup and password check pass, else ``None``."""
        user = self.find_by_username(username)
        if user is None:
            logger.debug("Login failed: unknown username %r", username)
            return None
        if not await self.verify_password(password, user.password_hash):
            logger.debug("Login failed: wrong password for user %d", user.id)
            return None
        return user
