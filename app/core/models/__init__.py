from .base import Base, TimestampedBase, IdentifiedBase
from .exceptions import (
    ApplicationError,
    NotFoundError,
    StorageError,
    ExternalAPIError,
    ResolutionError,
    CircuitBreakerError,
)

__all__ = [
    "Base",
    "TimestampedBase",
    "IdentifiedBase",
    "ApplicationError",
    "NotFoundError",
    "StorageError",
    "ExternalAPIError",
    "ResolutionError",
    "CircuitBreakerError",
]
