"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256::

    b64(json({"sub": <user id>, "exp": <unix seconds>})) + "." + hex(hmac)

Secret key is loaded from ``Settings.secret_key`` (env var: ``SECRET_KEY``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import time
from base64 import b64decode, b64encode
from typing import Callable

from api.errors import InvalidToken

logger = logging.getLogger(__name__)


class InvalidSignature(InvalidToken):
    """Token could not be decoded or its signature does not match."""


class TokenExpired(InvalidToken):
    """Token signature is fine but its expiry has passed."""


class TokenService:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, subject_id: int) -> str:
        """Create a signed token for ``subject_id`` expiring after the configured window."""
        payload = {
            "sub": subject_id,
            "exp": int(self._clock()) + self._expiry_seconds,
        }
        raw = json.dumps(payload).encode()
        return b64encode(raw).decode() + "." + self._sign(raw)

    def decode(self, token: str) -> int:
        """
        Verify ``token`` and return its subject id.

        Raises ``InvalidSignature`` or ``TokenExpired``.
        """
        encoded, sep, sig = token.partition(".")
        if not sep or not token.isascii():
            raise InvalidSignature("bad format")
        try:
            raw = b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidSignature("bad encoding")
        if not hmac.compare_digest(sig, self._sign(raw)):
            raise InvalidSignature("bad signature")
        try:
            payload = json.loads(raw)
            subject_id = int(payload["sub"])
            expires_at = float(payload["exp"])
        except (ValueError, TypeError, KeyError):
            raise InvalidSignature("bad payload")
        if self._clock() > expires_at:
            raise TokenExpired("token expired")
        return subject_id

    async def verify(self, token: str) -> int:
        """Async entry point used by the auth gate; logs the rejection reason."""
        try:
            return self.decode(token)
        except InvalidToken as exc:
            logger.info("Rejected token: %s (%s)", exc.reason, type(exc).__name__)
            raise
