"""FastAPI application for the SoftPack catalog"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from softpack import __version__
from softpack.app import SoftPackApp
from softpack.utils.config import ConfigManager
from softpack.utils.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
    RegistrationError,
    SoftPackError,
    ValidationError as InputValidationError,
)
from softpack.utils.logger import get_logger

from .admin_routes import router as admin_router
from .auth_routes import router as auth_router
from .catalog_routes import router as catalog_router

logger = get_logger(__name__)

# Most specific first; anything unmapped is a server error
_ERROR_STATUS = [
    (InputValidationError, status.HTTP_400_BAD_REQUEST),
    (RegistrationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
]


async def softpack_error_handler(request: Request, exc: SoftPackError) -> JSONResponse:
    for exc_type, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=code, content={"detail": str(exc)})
    logger.error("Unhandled SoftPack error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(core: Optional[SoftPackApp] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        core: Pre-built SoftPackApp (tests pass one backed by MemoryStore).
              When omitted, settings are loaded now so CORS follows
              web.cors_origins, and the services are built on startup.
    """
    if core is None:
        core = SoftPackApp()
    if core.settings is None:
        core.settings = ConfigManager().load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.softpack.catalog is None:
            app.state.softpack.initialize()
        yield

    app = FastAPI(
        title="SoftPack",
        description="Game cheat catalog with admin panel",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.softpack = core

    cors_origins = core.settings.web.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        # Credentialed requests only for an explicit allow-list
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(SoftPackError, softpack_error_handler)

    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(admin_router)
    return app


app = create_app()
