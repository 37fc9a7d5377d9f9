from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from activityrec.app import App
from activityrec.config import Config
from activityrec.errors import UserError
from activityrec.utils import now
from activityrec.web.error_handlers import (
    general_exception_handler,
    http_exception_handler,
    request_validation_error_handler,
    user_error_handler,
)
from activityrec.web.openapi import set_custom_openapi
from activityrec.web.routers import auth_router, recordings_router

CLIENT_DIR = Path(__file__).parent / "static"


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Activity Recordings API",
        lifespan=lifespan,
    )

    # Store app instance and config in app state
    app.state.app = app_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "timestamp": now().isoformat()}

    app.include_router(auth_router, prefix="/api")
    app.include_router(recordings_router, prefix="/api")

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Uploaded blobs and the instructions document are public and read-only
    for directory in (config.uploads_path, config.public_path):
        Path(directory).mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=config.uploads_path), name="uploads")
    app.mount("/public", StaticFiles(directory=config.public_path), name="public")
    # Client application, mounted last so it never shadows API routes
    app.mount("/", StaticFiles(directory=CLIENT_DIR, html=True), name="client")

    set_custom_openapi(app)

    return app
