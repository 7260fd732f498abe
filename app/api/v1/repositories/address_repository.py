from functools import lru_cache
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.models import Address as AddressModel
from app.core.models import StorageError
from app.core.repositories import BaseRepository
from app.core.schemas import Address

INSERT_IF_ABSENT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class AddressRepository(BaseRepository):
    """
    Addresses keyed by CEP. Rows are written once and never updated.
    """
    def __init__(self):
        super().__init__(AddressModel, Address)

    async def save(self, db: AsyncSession, address: Address) -> Address:
        """
        Store the address unless one already exists for its CEP.

        The insert is a single INSERT ... ON CONFLICT DO NOTHING, so two requests
        racing on the same unseen CEP still leave one row. Either way the stored
        row is returned, which may differ from the argument.
        """
        values = address.model_dump()
        try:
            statement = self._insert_if_absent(db, values)
            if statement is not None:
                await db.execute(statement)
            elif await db.get(self.model, address.cep) is None:
                db.add(self.model(**values))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Salvando {self.model.__name__}: ocorreu um erro. {e}") from e

        return await self.get_by_id(db, address.cep)

    def _insert_if_absent(self, db: AsyncSession, values: dict):
        insert = INSERT_IF_ABSENT.get(db.get_bind().dialect.name)
        if insert is None:
            return None
        return insert(self.model).values(**values).on_conflict_do_nothing(index_elements=["cep"])

    async def get_by_id(self, db: AsyncSession, cep: str) -> Optional[Address]:
        return await super().get_by_id(db, cep)


@lru_cache()
def get_address_repository() -> AddressRepository:
    """Dependency injector for AddressRepository."""
    return AddressRepository()
