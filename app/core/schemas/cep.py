import re
from typing import Optional

from pydantic import field_validator

from app.core.schemas.base import BaseSchema

CEP_PATTERN = re.compile(r"^\d{5}-?\d{3}$")


def normalize_cep(cep: str) -> str:
    """Return the 8-digit form of a CEP ("01001-000" -> "01001000").

    Raises:
        ValueError: if the value is not a CEP.
    """
    value = (cep or "").strip().replace(".", "")
    if not CEP_PATTERN.match(value):
        raise ValueError(f"CEP inválido: {cep!r}")
    return value.replace("-", "")


class AddressInput(BaseSchema):
    """Address as sent by clients: only the CEP, the rest is resolved."""
    cep: str

    @field_validator("cep")
    @classmethod
    def validate_cep(cls, value: str) -> str:
        return normalize_cep(value)


class Address(AddressInput):
    """Address for one CEP, in the shape returned by ViaCEP. The CEP is kept as 8 digits."""
    logradouro: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    localidade: Optional[str] = None
    uf: Optional[str] = None
    ibge: Optional[str] = None
    gia: Optional[str] = None
    ddd: Optional[str] = None
    siafi: Optional[str] = None
