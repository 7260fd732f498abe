from typing import Optional


class ApplicationError(Exception):
    """Base for errors raised by repositories and services, carrying an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """The requested entity does not exist."""
    status_code = 404


class StorageError(ApplicationError):
    """A persistence operation failed."""
    status_code = 500


class ExternalAPIError(ApplicationError):
    """Custom exception for external API errors."""
    status_code = 502


class ResolutionError(ExternalAPIError):
    """The postal code could not be resolved into an address."""
    status_code = 404


class CircuitBreakerError(ResolutionError):
    """Exception raised when circuit breaker is open."""
    status_code = 503
