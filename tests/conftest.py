"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.api.v1.models  # noqa: F401  registers the tables on Base
from app.api.v1.schemas import Customer, CustomerCreate
from app.core.models import Base, ResolutionError
from app.core.schemas import Address


SE_ADDRESS = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "gia": "1004",
    "ddd": "11",
    "siafi": "7107",
}

PAULISTA_ADDRESS = {
    "cep": "01310-100",
    "logradouro": "Avenida Paulista",
    "complemento": "de 612 a 1510 - lado par",
    "bairro": "Bela Vista",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "gia": "1004",
    "ddd": "11",
    "siafi": "7107",
}


class FakeResolver:
    """Postal resolver answering from a fixed table and recording calls."""

    def __init__(self, events: List[tuple], known: Optional[Dict[str, dict]] = None):
        self.events = events
        self.known = known if known is not None else {"01001000": SE_ADDRESS, "01310100": PAULISTA_ADDRESS}
        self.calls: List[str] = []

    async def resolve(self, cep: str) -> Address:
        self.calls.append(cep)
        self.events.append(("resolve", cep))
        if cep not in self.known:
            raise ResolutionError("CEP não encontrado")
        return Address(**self.known[cep])


class FakeAddressRepository:
    """In-memory address store keyed by CEP."""

    def __init__(self, events: List[tuple]):
        self.events = events
        self.items: Dict[str, Address] = {}

    async def get_by_id(self, db, cep: str) -> Optional[Address]:
        self.events.append(("address.get", cep))
        return self.items.get(cep)

    async def save(self, db, address: Address) -> Address:
        self.events.append(("address.save", address.cep))
        return self.items.setdefault(address.cep, address)


class FakeCustomerRepository:
    """In-memory customer store keyed by id."""

    def __init__(self, events: List[tuple]):
        self.events = events
        self.items: Dict[UUID, Customer] = {}

    async def get_all(self, db) -> List[Customer]:
        return list(self.items.values())

    async def get_by_id(self, db, customer_id: UUID) -> Optional[Customer]:
        self.events.append(("customer.get", customer_id))
        return self.items.get(customer_id)

    async def save(self, db, customer: CustomerCreate, customer_id: Optional[UUID] = None) -> Customer:
        saved = Customer(id=customer_id or uuid4(), nome=customer.nome, endereco=customer.endereco)
        self.events.append(("customer.save", saved.id))
        self.items[saved.id] = saved
        return saved

    async def delete(self, db, customer_id: UUID) -> bool:
        self.events.append(("customer.delete", customer_id))
        return self.items.pop(customer_id, None) is not None


@pytest.fixture
def events() -> List[tuple]:
    """Ordered log of collaborator calls shared by the fakes."""
    return []


@pytest.fixture
def fake_resolver(events) -> FakeResolver:
    return FakeResolver(events)


@pytest.fixture
def fake_address_repository(events) -> FakeAddressRepository:
    return FakeAddressRepository(events)


@pytest.fixture
def fake_customer_repository(events) -> FakeCustomerRepository:
    return FakeCustomerRepository(events)


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
