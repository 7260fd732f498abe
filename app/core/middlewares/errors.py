import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.models import ApplicationError
from app.core.schemas import ApiResponse

logger = logging.getLogger(__name__)


async def application_error_handler(request: Request, exc: ApplicationError):
    """Translate service errors into an ApiResponse with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse(
            status_code=exc.status_code,
            error=exc.message,
        ).model_dump(mode="json"),
    )
