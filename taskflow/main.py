"""FastAPI app factory.

Run with `uvicorn taskflow.main:create_app --factory`. Importing this module
does not read settings; create_app() does.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskflow.api.v1.router import api_router
from taskflow.core.config import get_settings
from taskflow.core.exception_handlers import register_exception_handlers
from taskflow.core.lifespan import create_lifespan
from taskflow.middleware import RequestIDMiddleware


def create_app() -> FastAPI:
    """Wire lifespan, exception handlers, middleware and the v1 routers."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: request ID -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    return app
