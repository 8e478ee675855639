"""
Todo API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.todos import router as todos_router
from auth.credentials import CredentialStore
from auth.jwt import TokenService
from auth.routes import router as auth_router
from config.settings import ConfigurationError, Settings, load_settings
from database.stores import InMemoryTaskStore, InMemoryUserStore, TaskStore, UserStore

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("bcrypt").setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    users: Optional[UserStore] = None,
    tasks: Optional[TaskStore] = None,
) -> FastAPI:
    """Build the application; stores default to fresh in-memory ones."""
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        description="Task API with JWT authentication",
        docs_url="/api-docs",
    )

    app.state.settings = settings
    app.state.credentials = CredentialStore(
        users if users is not None else InMemoryUserStore(),
        rounds=settings.bcrypt_rounds,
    )
    app.state.tasks = tasks if tasks is not None else InMemoryTaskStore()
    app.state.tokens = TokenService(
        settings.secret_key,
        expiry_seconds=settings.token_expiry_seconds,
    )

    register_middleware(app, settings)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(todos_router)

    @app.on_event("startup")
    async def on_startup():
        logger.info(
            "Server running on http://%s:%d (%s)",
            settings.bind_host, settings.port, settings.environment,
        )

    return app


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging(debug=False)
        logger.error("%s", exc)
        sys.exit(1)

    configure_logging(settings.debug)
    uvicorn.run(
        create_app(settings),
        host=settings.bind_host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
