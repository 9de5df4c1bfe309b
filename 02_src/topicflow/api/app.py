"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..app import Application
from ..logging_config import get_logger
from .routes import configuration, publishing, topics

logger = get_logger(__name__)


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if _app is None:
        _app = Application()
    return _app


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 Bad Request."""
    logger.info("Bad request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Without an explicit application the global one from get_app() is used.
    """
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        # Startup
        await application.start()
        yield
        # Shutdown
        await application.stop()

    fastapi_app = FastAPI(
        title="Topicflow API",
        description="Publish/subscribe dataflow of agents over named topics",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Enable CORS
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:5174"],  # Vite default
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    fastapi_app.include_router(publishing.create_publishing_router(application))
    fastapi_app.include_router(configuration.create_configuration_router(application))
    fastapi_app.include_router(topics.create_topics_router(application))

    return fastapi_app
