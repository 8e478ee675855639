"""
Tests for the signed token service.
"""

import json
from base64 import b64decode, b64encode

import pytest

from api.errors import InvalidToken
from auth.jwt import InvalidSignature, TokenExpired, TokenService


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tokens(clock):
    return TokenService("secret", expiry_seconds=3600, clock=clock)


class TestTokenIssue:
    def test_roundtrip_returns_subject(self, tokens):
        assert tokens.decode(tokens.issue(42)) == 42

    def test_expiry_is_one_hour_after_issue(self, tokens, clock):
        token = tokens.issue(1)
        payload = json.loads(b64decode(token.split(".")[0]))
        assert payload["exp"] == int(clock.now) + 3600

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestTokenVerify:
    def test_valid_until_expiry(self, tokens, clock):
        token = tokens.issue(7)
        clock.now += 3600
        assert tokens.decode(token) == 7

    def test_expired_strictly_after_one_hour(self, tokens, clock):
        token = tokens.issue(7)
        clock.now += 3600.001
        with pytest.raises(TokenExpired):
            tokens.decode(token)

    def test_other_secret_is_bad_signature(self, tokens, clock):
        forged = TokenService("other", clock=clock).issue(7)
        with pytest.raises(InvalidSignature):
            tokens.decode(forged)

    def test_tampered_payload_is_bad_signature(self, tokens):
        _, sig = tokens.issue(7).split(".")
        raw = json.dumps({"sub": 8, "exp": 9_999_999_999}).encode()
        with pytest.raises(InvalidSignature):
            tokens.decode(b64encode(raw).decode() + "." + sig)

    @pytest.mark.parametrize("garbage", ["", "garbage", "a.b", "!!!.abc", "Bearer", "ñ.ñ"])
    def test_garbage_is_invalid(self, tokens, garbage):
        with pytest.raises(InvalidToken):
            tokens.decode(garbage)

    def test_expired_and_bad_signature_share_base(self):
        assert issubclass(TokenExpired, InvalidToken)
        assert issubclass(InvalidSignature, InvalidToken)

    @pytest.mark.asyncio
    async def test_async_verify(self, tokens, clock):
        token = tokens.issue(3)
        assert await tokens.verify(token) == 3
        clock.now += 7200
        with pytest.raises(TokenExpired):
            await tokens.verify(token)
