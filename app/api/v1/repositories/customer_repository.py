from functools import lru_cache
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.v1.models import Address as AddressModel, Customer as CustomerModel
from app.api.v1.schemas import Customer, CustomerCreate
from app.core.models import StorageError
from app.core.repositories import BaseRepository


class CustomerRepository(BaseRepository):
    """
    Repository for Customer entity, returning customers with their address loaded.
    """
    def __init__(self):
        super().__init__(CustomerModel, Customer)

    def get_load_options(self) -> list:
        return [selectinload(self.model.endereco)]

    async def get_all(self, db: AsyncSession) -> List[Customer]:
        return await super().get_all(db)

    async def get_by_id(self, db: AsyncSession, customer_id: UUID) -> Optional[Customer]:
        return await super().get_by_id(db, customer_id)

    async def save(self, db: AsyncSession, customer: CustomerCreate, customer_id: Optional[UUID] = None) -> Customer:
        """
        Insert the customer, or overwrite the one with `customer_id`.

        The address for `customer.endereco.cep` must already be stored.

        Raises:
            StorageError: the address is missing or the write failed.
        """
        cep = customer.endereco.cep
        try:
            address = await db.get(AddressModel, cep)
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Salvando {self.model.__name__}: ocorreu um erro. {e}") from e
        if address is None:
            raise StorageError(f"Salvando {self.model.__name__}: endereço do CEP {cep} não está cadastrado.")

        item = await self._get_by_id_orm(db, customer_id) if customer_id is not None else None
        if item is None:
            item = self.model(id=customer_id) if customer_id is not None else self.model()

        item.nome = customer.nome
        item.endereco = address

        item = await self._commit(db, item)
        return Customer.model_validate(item)


@lru_cache()
def get_customer_repository() -> CustomerRepository:
    """Dependency injector for CustomerRepository."""
    return CustomerRepository()
