from app.core.schemas.base import BaseSchema
from app.core.schemas.api_response import ApiResponse
from app.core.schemas.cep import Address, AddressInput, normalize_cep

__all__ = ["BaseSchema", "ApiResponse", "Address", "AddressInput", "normalize_cep"]
