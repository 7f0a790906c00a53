from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from wa_publisher.core.exceptions import ServiceError


async def local_exception_handler(request: Request, exc: ServiceError):
    """Renders pipeline errors as ``{"error": ..., **payload}``."""
    logger.warning(f"Request failed: {exc.message} (Path: {request.url.path})")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, **(exc.payload or {})},
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all for defects escaping a route (500)."""
    logger.exception(f"Unhandled exception: {exc} (Path: {request.url.path})")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )
