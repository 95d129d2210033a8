import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_database import make_engine, make_session_factory
from notes_database.init_db import init_db

from .auth import AuthService
from .config import Settings
from .errors import register_exception_handlers
from .middleware import RequestLoggingMiddleware
from .routes import account, auth, health, notes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int) -> None:
    """Root logging to stdout; a no-op if the root logger is already configured."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine and the token service are created here from
    ``settings`` and hung on ``app.state``; nothing reads them from globals.
    """
    settings = settings or Settings.from_env()
    engine = make_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level_value)
        if settings.uses_default_secret:
            logger.warning("SECRET_KEY is not set; signing tokens with the development default")
        init_db(engine)
        logger.info("Notes API ready on http://%s:%d", settings.host, settings.port)
        yield
        engine.dispose()
        logger.info("Notes API shut down")

    app = FastAPI(
        title="Personal Notes Backend API",
        description="Backend API for handling user auth and personal notes management.",
        version="1.0.0",
        openapi_tags=[
            {"name": "Authentication", "description": "User registration and login"},
            {"name": "Notes", "description": "Create, update, view, delete notes"},
            {"name": "Account", "description": "Password change and account deletion"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = make_session_factory(engine)
    app.state.auth_service = AuthService(
        settings.secret_key,
        expires_delta=timedelta(hours=settings.access_token_expire_hours),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(account.router)
    return app


app = create_app()


def run():
    """Console entry point: serve the app with uvicorn."""
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
