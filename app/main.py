import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from app.core.bootstrap import bootstrap_app
from app.core.config import settings
from app.core.middlewares import (
    application_error_handler,
    limiter,
    rate_limit_exceeded_handler,
    request_logging_middleware,
)
from app.core.models import ApplicationError
from app.core.schemas import ApiResponse
from app.core.services import get_http_client_manager
from app.db import db_manager

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Opens the HTTP client pool used for ViaCEP and makes sure the tables exist,
    then releases both on shutdown.
    """
    logger.info("Starting application...")

    manager = get_http_client_manager()
    logger.info("Initializing HTTP Client Pool...")
    await manager.initialize()

    logger.info("Creating database tables...")
    await db_manager.create_all()
    logger.info("Database ready.")

    yield

    logger.info("Shutting down application...")

    logger.info("Disconnecting database engine...")
    await db_manager.disconnect()

    logger.info("Closing HTTP Client Pool...")
    await manager.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc"
    )

# Add rate limiter state to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(ApplicationError, application_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler: logs the error and answers 500 without internals in production.
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    response = ApiResponse(status_code=500, error=exc.__class__.__name__)
    if settings.ENVIRONMENT.upper() not in ("PRODUCTION", "PROD"):
        response.detail = str(exc)

    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))


# Request logging middleware
app.middleware("http")(request_logging_middleware)


bootstrap_app(app)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.VERSION}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0",
                port=8000,
                log_level="info"
        )
