import logging
from functools import lru_cache
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.repositories import (
    AddressRepository,
    CustomerRepository,
    get_address_repository,
    get_customer_repository,
)
from app.api.v1.schemas import Customer, CustomerCreate
from app.core.config import settings
from app.core.models import NotFoundError
from app.core.services import ViaCepService, get_viacep_service

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Customer use cases.

    Every write goes through save_customer_with_address: the customer is linked to
    the stored address of its CEP, and a CEP seen for the first time is resolved on
    ViaCEP and stored before the customer is.

    Errors from the collaborators (NotFoundError, ResolutionError, StorageError)
    are propagated as they are.
    """

    def __init__(
            self,
            customer_repository: CustomerRepository,
            address_repository: AddressRepository,
            postal_resolver: ViaCepService,
            raise_on_missing_update: bool = False,
    ):
        self.customer_repository = customer_repository
        self.address_repository = address_repository
        self.postal_resolver = postal_resolver
        self.raise_on_missing_update = raise_on_missing_update

    async def find_all(self, db: AsyncSession) -> List[Customer]:
        return await self.customer_repository.get_all(db)

    async def find_by_id(self, db: AsyncSession, customer_id: UUID) -> Customer:
        customer = await self.customer_repository.get_by_id(db, customer_id)
        if customer is None:
            raise NotFoundError(f"Cliente {customer_id} não encontrado.")
        return customer

    async def insert(self, db: AsyncSession, customer: CustomerCreate) -> Customer:
        return await self.save_customer_with_address(db, customer)

    async def update(self, db: AsyncSession, customer_id: UUID, customer: CustomerCreate) -> Optional[Customer]:
        """
        Overwrite an existing customer.

        Returns None without writing anything when no customer has `customer_id`,
        unless the service was built with raise_on_missing_update.
        """
        existing = await self.customer_repository.get_by_id(db, customer_id)
        if existing is None:
            if self.raise_on_missing_update:
                raise NotFoundError(f"Cliente {customer_id} não encontrado.")
            logger.info(f"Update ignored: customer {customer_id} does not exist")
            return None

        return await self.save_customer_with_address(db, customer, customer_id)

    async def delete(self, db: AsyncSession, customer_id: UUID) -> bool:
        """Delete a customer. Returns False when there was nothing to delete."""
        deleted = await self.customer_repository.delete(db, customer_id)
        if not deleted:
            logger.debug(f"Delete ignored: customer {customer_id} does not exist")
        return deleted

    async def save_customer_with_address(
            self,
            db: AsyncSession,
            customer: CustomerCreate,
            customer_id: Optional[UUID] = None,
    ) -> Customer:
        """
        Link the customer to the stored address of its CEP and save it.

        The address is resolved and stored first when the CEP is unknown; a stored
        address is reused untouched. `customer.endereco` is replaced by the stored
        address.

        Raises:
            ResolutionError: ViaCEP could not resolve the CEP.
            StorageError: reading or writing a repository failed.
        """
        cep = customer.endereco.cep

        address = await self.address_repository.get_by_id(db, cep)
        if address is None:
            logger.info(f"CEP {cep} not stored yet, resolving on ViaCEP")
            resolved = await self.postal_resolver.resolve(cep)
            address = await self.address_repository.save(db, resolved)
        else:
            logger.debug(f"Reusing stored address for CEP {cep}")

        customer.endereco = address
        return await self.customer_repository.save(db, customer, customer_id)


@lru_cache()
def get_customer_service() -> CustomerService:
    """Dependency injector for CustomerService."""
    return CustomerService(
        customer_repository=get_customer_repository(),
        address_repository=get_address_repository(),
        postal_resolver=get_viacep_service(),
        raise_on_missing_update=settings.RAISE_ON_MISSING_UPDATE,
    )
