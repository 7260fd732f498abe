import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, DeclarativeBase


# -----------------------------------------------------------
# Base Configuration (required for Alembic/SQLAlchemy 2.0)
# -----------------------------------------------------------
class Base(DeclarativeBase):
    """Declarative base every table is registered on."""


class TimestampedBase(Base):
    """Adds created_at. Used directly by tables with a natural key."""
    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )


class IdentifiedBase(TimestampedBase):
    """Adds a generated UUID primary key on top of created_at."""
    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
