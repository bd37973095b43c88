"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    API_PREFIX,
    HOST,
    LEADERBOARD_SIZE,
    LOG_LEVEL,
    PORT,
    RELOAD,
    SNAPSHOT_PATH,
    SQLITE_PATH,
    STORE_BACKEND,
    configure_logging,
    make_engine,
)
from .services import ClickerGame, JsonSnapshotStore, SqlUserStore, UserStore
from .services.errors import ClickerError
from .services.usernames import ProfanityCheck, default_is_profane

logger = logging.getLogger(__name__)


def build_store() -> UserStore:
    """Create the store selected by ``STORE_BACKEND``."""

    if STORE_BACKEND == "sqlite":
        return SqlUserStore(make_engine(SQLITE_PATH))
    return JsonSnapshotStore(SNAPSHOT_PATH)


async def clicker_error_handler(_: Request, exc: ClickerError) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


def create_app(
    store: Optional[UserStore] = None,
    is_profane: ProfanityCheck = default_is_profane,
) -> FastAPI:
    configure_logging(LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        user_store = store if store is not None else build_store()
        user_store.load()
        app.state.game = ClickerGame(
            user_store, is_profane=is_profane, leaderboard_size=LEADERBOARD_SIZE
        )
        logger.info("Serving %d users from %s store", user_store.count(), type(user_store).__name__)
        yield

    app = FastAPI(title="Button Clicker API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ClickerError, clicker_error_handler)

    register_routes(app, prefix=API_PREFIX)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run("clicker.app:app", host=HOST, port=PORT, reload=RELOAD)


if __name__ == "__main__":
    main()
