from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.models import IdentifiedBase


class Customer(IdentifiedBase):
    """Customer (cliente), linked to the address of its CEP."""
    __tablename__ = "clientes"

    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    endereco_cep: Mapped[str] = mapped_column(ForeignKey("enderecos.cep"), index=True, nullable=False)

    # Always eager loaded by CustomerRepository
    endereco: Mapped["Address"] = relationship()

    def __repr__(self):
        return f"<Customer(id='{self.id}', nome='{self.nome}', cep='{self.endereco_cep}')>"
