from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.models import Base, StorageError
from app.core.schemas import BaseSchema


T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Key-value style access to one table. Public methods return validated schemas;
    the `_..._orm` helpers return the mapped instance for in-place changes.

    Any SQLAlchemy failure surfaces as StorageError.
    """

    def __init__(self, model: Type[T], schema: Type[BaseSchema]):
        self.model = model
        self.schema = schema

    def get_load_options(self) -> list:
        """Loader options applied to every read, e.g. eager relationships."""
        return []

    async def _get_by_id_orm(self, db: AsyncSession, item_id) -> Optional[T]:
        try:
            return await db.get(
                self.model, item_id, options=self.get_load_options(), populate_existing=True
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Recuperando {self.model.__name__}: ocorreu um erro. {e}") from e

    async def get_by_id(self, db: AsyncSession, item_id):
        item = await self._get_by_id_orm(db, item_id)
        if item is None:
            return None
        return self.schema.model_validate(item)

    async def get_all(self, db: AsyncSession) -> List:
        try:
            result = await db.execute(select(self.model).options(*self.get_load_options()))
            items = result.scalars().all()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Recuperando {self.model.__name__}: ocorreu um erro. {e}") from e
        return [self.schema.model_validate(item) for item in items]

    async def delete(self, db: AsyncSession, item_id) -> bool:
        item = await self._get_by_id_orm(db, item_id)
        if item is None:
            return False
        try:
            await db.delete(item)
            await db.commit()
            return True
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Excluindo {self.model.__name__}: ocorreu um erro. {e}") from e

    async def _commit(self, db: AsyncSession, item: T) -> T:
        db.add(item)
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StorageError(f"Salvando {self.model.__name__}: ocorreu um erro. {e}") from e
        return item
