"""
Secure Login service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from auth.routes import router as auth_router
from auth.service import CredentialService
from config.settings import Settings, config
from database.credential_store import CredentialStore
from database.session import Database, mask_url

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "asyncio", "aiosqlite"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or config
    database = database or Database(
        settings.database_url,
        echo=settings.database_echo,
        connect_timeout=settings.database_connect_timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Connecting to %s…", mask_url(database.url))
        try:
            await database.open()
        except Exception:
            logger.exception("Could not connect to the database; refusing to start")
            raise

        store = CredentialStore(database)
        app.state.database = database
        app.state.credential_service = CredentialService(store, rounds=settings.bcrypt_rounds)
        logger.info("Application ready to accept requests.")
        try:
            yield
        finally:
            await database.close()

    app = FastAPI(
        title="Secure Login",
        version="1.0.0",
        description="Signup and login with bcrypt-hashed passwords.",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    configure_logging(config)
    logger.info("Server running on http://localhost:%d", config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
