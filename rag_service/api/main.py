"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, error translation and
observability middleware, and configures the uvicorn server.

Dependencies: fastapi, rag_service.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rag_service import __version__
from rag_service.api.deps.dependencies import get_service_cache
from rag_service.configs import get_settings
from rag_service.core.exceptions import RAGServiceException
from rag_service.models.common import ErrorResponse
from rag_service.observability.log_utils import log_exception_with_context
from rag_service.observability.logger import configure_logging
from rag_service.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, documents_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the service graph on startup and closes the HTTP client on shutdown.
    """
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.chat_service
    _ = cache.document_service
    logger.info(
        "Service cache pre-warmed",
        extra={"index_size": cache.vector_store.count()},
    )

    yield

    await cache.aclose()
    logger.info("Service cache cleared")


async def rag_exception_handler(request: Request, exc: RAGServiceException) -> JSONResponse:
    """Translate service exceptions into ErrorResponse bodies."""
    if exc.status_code >= 500:
        log_exception_with_context(
            logger,
            f"{request.method} {request.url.path} - {type(exc).__name__}",
            exc,
            path=request.url.path,
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} - {exc.status_code}: {exc.message}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )

    body = ErrorResponse(error=exc.message, code=exc.status_code, details=exc.details or None)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="RAG Service API",
        description="Document question answering with retrieval-augmented generation",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(RAGServiceException, rag_exception_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "rag_service.api.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )


if __name__ == "__main__":
    run()
