"""FastAPI application factory — REST surface over CatalogService."""

import logging
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from vidcatalog.api.videos import router as videos_router
from vidcatalog.service import (
    CatalogService,
    VideoDataError,
    VideoNotFoundError,
    create_default_service,
)

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn anything the routes did not handle into a logged 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"code": "INTERNAL_ERROR", "message": str(exc)},
            )


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


async def _video_not_found(request: Request, exc: VideoNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"code": "VIDEO_NOT_FOUND", "message": str(exc)},
    )


async def _video_data_error(request: Request, exc: VideoDataError) -> JSONResponse:
    logger.error("Video data error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "VIDEO_DATA_ERROR", "message": str(exc)},
    )


def create_app(service: CatalogService | None = None) -> FastAPI:
    """Build the REST app around one CatalogService.

    Args:
        service: Pre-built service (tests pass one with in-memory backends).
                 Defaults to the store selected by settings.
    """
    app = FastAPI(
        title="vidcatalog",
        description="Video catalog with payload upload, search and per-user likes.",
        version="0.1.0",
    )
    app.state.service = service or create_default_service()

    # Middleware (order matters — outermost last added)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(VideoNotFoundError, _video_not_found)
    app.add_exception_handler(VideoDataError, _video_data_error)

    app.include_router(videos_router)

    @app.get("/health", tags=["health"])
    def health_check():
        return {"status": "ok"}

    return app
