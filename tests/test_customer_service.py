"""
Tests for CustomerService - the save-with-address orchestration and CRUD passthroughs.
"""

import logging
from uuid import uuid4

import pytest

from app.api.v1.schemas import CustomerCreate
from app.api.v1.services import CustomerService
from app.core.models import NotFoundError, ResolutionError, StorageError
from app.core.schemas import Address

from tests.conftest import SE_ADDRESS


def new_customer(nome: str = "Maria", cep: str = "01001-000") -> CustomerCreate:
    return CustomerCreate(nome=nome, endereco={"cep": cep})


@pytest.fixture
def service(fake_customer_repository, fake_address_repository, fake_resolver) -> CustomerService:
    return CustomerService(fake_customer_repository, fake_address_repository, fake_resolver)


class TestSaveCustomerWithAddress:
    """Address reuse or resolution before the customer write."""

    async def test_unknown_cep_is_resolved_and_stored_before_customer(self, service, events):
        saved = await service.insert(None, new_customer())

        assert events == [
            ("address.get", "01001000"),
            ("resolve", "01001000"),
            ("address.save", "01001000"),
            ("customer.save", saved.id),
        ]
        assert saved.endereco.logradouro == "Praça da Sé"
        assert saved.endereco.cep == "01001000"

    async def test_known_cep_reuses_stored_address(self, service, fake_address_repository, fake_resolver, events):
        stored = Address(**{**SE_ADDRESS, "logradouro": "Praça da Sé (cadastro local)"})
        fake_address_repository.items["01001000"] = stored

        saved = await service.insert(None, new_customer())

        assert fake_resolver.calls == []
        assert ("address.save", "01001000") not in events
        assert saved.endereco == stored
        assert fake_address_repository.items["01001000"] is stored

    async def test_second_customer_with_same_cep_links_same_address(self, service, fake_address_repository, fake_resolver, events):
        first = await service.insert(None, new_customer("Maria"))
        second = await service.insert(None, new_customer("João", "01001000"))

        assert fake_resolver.calls == ["01001000"]
        assert [e for e in events if e[0] == "address.save"] == [("address.save", "01001000")]
        assert list(fake_address_repository.items) == ["01001000"]
        assert first.endereco == second.endereco

    async def test_input_address_is_replaced_by_stored_one(self, service):
        customer = new_customer()

        await service.insert(None, customer)

        assert isinstance(customer.endereco, Address)
        assert customer.endereco.localidade == "São Paulo"

    async def test_logs_resolution_of_unknown_cep(self, service, caplog):
        caplog.set_level(logging.DEBUG, logger="app.api.v1.services.customer_service")

        await service.insert(None, new_customer())

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.INFO, "CEP 01001000 not stored yet, resolving on ViaCEP"),
        ]

    async def test_logs_reuse_of_stored_address(self, service, fake_address_repository, caplog):
        fake_address_repository.items["01001000"] = Address(**SE_ADDRESS)
        caplog.set_level(logging.DEBUG, logger="app.api.v1.services.customer_service")

        await service.insert(None, new_customer())

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.DEBUG, "Reusing stored address for CEP 01001000"),
        ]

    async def test_resolution_error_propagates_without_writes(self, service, fake_address_repository, fake_customer_repository):
        with pytest.raises(ResolutionError):
            await service.insert(None, new_customer(cep="99999-999"))

        assert fake_address_repository.items == {}
        assert fake_customer_repository.items == {}

    async def test_storage_error_propagates(self, service, fake_address_repository):
        async def failing_save(db, address):
            raise StorageError("disco cheio")

        fake_address_repository.save = failing_save

        with pytest.raises(StorageError, match="disco cheio"):
            await service.insert(None, new_customer())


class TestCrudOperations:
    """Passthrough operations and their edge cases."""

    async def test_find_all(self, service):
        await service.insert(None, new_customer("Maria"))
        await service.insert(None, new_customer("João", "01310-100"))

        customers = await service.find_all(None)

        assert sorted(c.nome for c in customers) == ["João", "Maria"]

    async def test_find_by_id(self, service):
        saved = await service.insert(None, new_customer())

        found = await service.find_by_id(None, saved.id)

        assert found == saved

    async def test_find_by_id_absent_raises_not_found(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.find_by_id(None, uuid4())

        assert exc_info.value.status_code == 404

    async def test_update_existing_keeps_id(self, service, fake_customer_repository):
        saved = await service.insert(None, new_customer("Maria"))

        updated = await service.update(None, saved.id, new_customer("Maria Silva", "01310-100"))

        assert updated.id == saved.id
        assert updated.nome == "Maria Silva"
        assert updated.endereco.logradouro == "Avenida Paulista"
        assert list(fake_customer_repository.items) == [saved.id]

    async def test_update_absent_is_ignored_by_default(self, service, events):
        result = await service.update(None, uuid4(), new_customer())

        assert result is None
        assert [e[0] for e in events] == ["customer.get"]

    async def test_update_absent_raises_when_configured(self, fake_customer_repository, fake_address_repository, fake_resolver, events):
        service = CustomerService(
            fake_customer_repository, fake_address_repository, fake_resolver, raise_on_missing_update=True
        )

        with pytest.raises(NotFoundError):
            await service.update(None, uuid4(), new_customer())

        assert [e[0] for e in events] == ["customer.get"]

    async def test_delete(self, service, fake_customer_repository):
        saved = await service.insert(None, new_customer())

        assert await service.delete(None, saved.id) is True
        assert fake_customer_repository.items == {}

    async def test_delete_absent_returns_false(self, service):
        assert await service.delete(None, uuid4()) is False
