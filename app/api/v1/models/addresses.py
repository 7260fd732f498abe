from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.models import TimestampedBase


class Address(TimestampedBase):
    """Locality data for one CEP. Shared by every customer with that CEP and never updated."""
    __tablename__ = "enderecos"

    cep: Mapped[str] = mapped_column(String(8), primary_key=True)
    logradouro: Mapped[Optional[str]] = mapped_column(String(255))
    complemento: Mapped[Optional[str]] = mapped_column(String(255))
    bairro: Mapped[Optional[str]] = mapped_column(String(255))
    localidade: Mapped[Optional[str]] = mapped_column(String(255))
    uf: Mapped[Optional[str]] = mapped_column(String(2))
    ibge: Mapped[Optional[str]] = mapped_column(String(10))
    gia: Mapped[Optional[str]] = mapped_column(String(10))
    ddd: Mapped[Optional[str]] = mapped_column(String(3))
    siafi: Mapped[Optional[str]] = mapped_column(String(10))

    def __repr__(self):
        return f"<Address(cep='{self.cep}', localidade='{self.localidade}')>"
