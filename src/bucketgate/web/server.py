from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bucketgate.app import App
from bucketgate.config import Config
from bucketgate.errors import UserError
from bucketgate.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from bucketgate.web.middleware import access_gate_middleware
from bucketgate.web.openapi import set_custom_openapi
from bucketgate.web.routers import auth_router, files_router, pages_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        # Store app instance and config in app state
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="bucketgate",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    # Every request passes the access gate before reaching a route
    app.middleware("http")(access_gate_middleware)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(pages_router)
    app.include_router(auth_router)
    app.include_router(files_router)
    app.mount("/static", StaticFiles(directory=config.public_path, check_dir=False), name="static")

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
