from functools import lru_cache
from typing import Optional

import httpx
from app.core.config import settings


class HTTPClientManager:
    """
    Owns the single, persistent httpx.AsyncClient used for outbound calls (ViaCEP).

    Connection pooling, timeouts and default headers are configured once here, at
    application startup, and the client is closed on shutdown.
    """

    def __init__(self):
        # Created by initialize() during the application lifespan
        self._client: Optional[httpx.AsyncClient] = None
        self._is_initialized: bool = False

    async def initialize(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Creates the httpx.AsyncClient with the configured pool limits and timeout.
        Calling it again while initialized is a no-op.

        Args:
            transport: Optional transport override (tests use httpx.MockTransport).
        """
        if self._is_initialized:
            return

        limits = httpx.Limits(
            max_keepalive_connections=settings.HTTPX_MAX_KEEPALIVE,
            max_connections=settings.HTTPX_MAX_CONNECTIONS,
            keepalive_expiry=settings.HTTPX_KEEPALIVE_EXPIRY,
        )
        timeout = httpx.Timeout(settings.REQUEST_TIMEOUT)
        headers = {
            "User-Agent": f"{settings.PROJECT_NAME}/{settings.VERSION}",
            "Accept": "application/json",
        }

        self._client = httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            headers=headers,
            verify=settings.HTTPX_VERIFY_SSL,
            transport=transport,
        )
        self._is_initialized = True

    def get_client(self) -> httpx.AsyncClient:
        """
        Provides the configured client.
        Raises an error if the client has not been initialized.
        """
        if not self._client:
            raise RuntimeError("HTTPClientManager has not been initialized. Call initialize() first.")
        return self._client

    async def close(self) -> None:
        """Closes the client and its connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._is_initialized = False


@lru_cache
def get_http_client_manager() -> HTTPClientManager:
    """Returns the single HTTPClientManager instance."""
    return HTTPClientManager()
