import logging
from functools import lru_cache

import httpx
from fastapi import status
from pydantic import ValidationError

from app.core.config import settings
from app.core.models import CircuitBreakerError, ResolutionError
from app.core.schemas import Address, normalize_cep
from app.core.services.circuit_breaker_service import CircuitBreaker, get_circuit_breaker
from app.core.services.http_client_manager import HTTPClientManager, get_http_client_manager

logger = logging.getLogger(__name__)


class ViaCepService:
    """Resolves a CEP into an Address through the ViaCEP web service."""

    def __init__(self, client_manager: HTTPClientManager, circuit_breaker: CircuitBreaker,
                 base_url: str = settings.VIACEP_BASE_URL):
        self.client_manager = client_manager
        self.circuit_breaker = circuit_breaker
        self.base_url = base_url.rstrip("/")

    async def resolve(self, cep: str) -> Address:
        """
        Fetch the address for a CEP.

        Args:
            cep: CEP with or without the hyphen.

        Returns:
            Address keyed by the 8-digit CEP.

        Raises:
            ResolutionError: invalid CEP (400), unknown CEP (404) or ViaCEP unreachable (503).
            CircuitBreakerError: ViaCEP failed too often recently and calls are suspended.
        """
        try:
            cep = normalize_cep(cep)
        except ValueError as e:
            raise ResolutionError(str(e), status_code=status.HTTP_400_BAD_REQUEST) from e

        url = f"{self.base_url}/{cep}/json/"
        client = self.client_manager.get_client()

        if not self.circuit_breaker.can_execute():
            raise CircuitBreakerError("Circuit breaker is open. ViaCEP is temporarily unavailable.")

        try:
            response = await client.get(url)
        except httpx.RequestError as e:
            self.circuit_breaker.record_failure()
            logger.warning(f"ViaCEP request for {cep} failed: {e}")
            raise ResolutionError(
                f"Consulta do CEP {cep} falhou: {e}",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from e

        if response.status_code >= 500:
            self.circuit_breaker.record_failure()
            logger.warning(f"ViaCEP answered {response.status_code} for {cep}")
            raise ResolutionError(
                f"Consulta do CEP {cep} falhou: ViaCEP respondeu {response.status_code}",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        self.circuit_breaker.record_success()

        if response.status_code != 200:
            logger.info(f"CEP {cep} not found on ViaCEP")
            raise ResolutionError("CEP não encontrado")

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"ViaCEP answered a body that is not JSON for {cep}")
            raise ResolutionError(
                f"Consulta do CEP {cep} falhou: resposta inválida do ViaCEP",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from e

        if not isinstance(payload, dict):
            logger.warning(f"ViaCEP answered an unexpected payload for {cep}: {payload!r}")
            raise ResolutionError(
                f"Consulta do CEP {cep} falhou: resposta inválida do ViaCEP",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        if payload.get("erro"):
            logger.info(f"CEP {cep} not found on ViaCEP")
            raise ResolutionError("CEP não encontrado")

        try:
            # ViaCEP formats the key as 00000-000; addresses are stored by the 8 digits
            return Address(**{**payload, "cep": cep})
        except ValidationError as e:
            logger.warning(f"ViaCEP answered invalid address fields for {cep}: {e}")
            raise ResolutionError(
                f"Consulta do CEP {cep} falhou: resposta inválida do ViaCEP",
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            ) from e


@lru_cache
def get_viacep_service() -> ViaCepService:
    return ViaCepService(get_http_client_manager(), get_circuit_breaker())
