from .http_client_manager import HTTPClientManager, get_http_client_manager
from .circuit_breaker_service import CircuitBreaker, get_circuit_breaker
from .cep_service import ViaCepService, get_viacep_service

__all__ = [
    "HTTPClientManager",
    "get_http_client_manager",
    "CircuitBreaker",
    "get_circuit_breaker",
    "ViaCepService",
    "get_viacep_service",
]
