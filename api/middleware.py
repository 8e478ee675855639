"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS and the request timer, which logs status and user per request."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        # set by the auth gate on protected routes only
        user_id = getattr(request.state, "user_id", None)
        logger.debug(
            "%s %s -> %d (user %s) in %.3fs",
            request.method, request.url.path, response.status_code,
            user_id if user_id is not None else "-", elapsed,
        )
        return response
