import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.schemas import CustomerCreate, CustomerUpdate
from app.api.v1.services import CustomerService, get_customer_service
from app.core.models import NotFoundError
from app.core.schemas import ApiResponse
from app.core.security import verify_api_key
from app.db.session import get_session

logger = logging.getLogger(__name__)

prefix = "/clientes"
router = APIRouter(
    prefix=prefix,
    dependencies=[Depends(verify_api_key)],
    responses={
        403: {"description": "Forbidden - Invalid API key"},
        404: {"description": "Customer or CEP not found"},
        503: {"description": "ViaCEP unavailable"},
    },
)


@router.get("", response_model=ApiResponse)
async def read_customers(
        db: Annotated[AsyncSession, Depends(get_session)],
        customer_service: Annotated[CustomerService, Depends(get_customer_service)]
):
    """List every customer with its address."""
    customers = await customer_service.find_all(db)
    return ApiResponse(
        status_code=status.HTTP_200_OK,
        detail="Recuperando clientes: clientes recuperados com sucesso",
        data=customers
    )


@router.get("/{customer_id}", response_model=ApiResponse)
async def read_customer(
        customer_id: UUID,
        db: Annotated[AsyncSession, Depends(get_session)],
        customer_service: Annotated[CustomerService, Depends(get_customer_service)]
):
    """Get a customer by ID."""
    customer = await customer_service.find_by_id(db, customer_id)
    return ApiResponse(
        status_code=status.HTTP_200_OK,
        detail="Recuperando cliente: cliente recuperado com sucesso",
        data=customer
    )


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
        customer: CustomerCreate,
        db: Annotated[AsyncSession, Depends(get_session)],
        customer_service: Annotated[CustomerService, Depends(get_customer_service)]
):
    """Create a customer, resolving the address of its CEP when needed."""
    created = await customer_service.insert(db, customer)
    logger.info(f"Customer created: {created.id}")
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        detail="Cadastrando cliente: cliente criado com sucesso",
        data=created
    )


@router.put("/{customer_id}", response_model=ApiResponse)
async def update_customer(
        customer_id: UUID,
        customer: CustomerUpdate,
        db: Annotated[AsyncSession, Depends(get_session)],
        customer_service: Annotated[CustomerService, Depends(get_customer_service)]
):
    """Update a customer. An unknown ID changes nothing unless configured to fail."""
    updated = await customer_service.update(db, customer_id, customer)
    if updated is None:
        return ApiResponse(
            status_code=status.HTTP_200_OK,
            detail="Atualizando cliente: nenhum cliente com esse id, nada foi alterado."
        )
    return ApiResponse(
        status_code=status.HTTP_200_OK,
        detail="Atualizando cliente: cliente atualizado com sucesso",
        data=updated
    )


@router.delete("/{customer_id}", response_model=ApiResponse)
async def delete_customer(
        customer_id: UUID,
        db: Annotated[AsyncSession, Depends(get_session)],
        customer_service: Annotated[CustomerService, Depends(get_customer_service)]
):
    """Delete a customer by ID."""
    deleted = await customer_service.delete(db, customer_id)
    if not deleted:
        raise NotFoundError(f"Cliente {customer_id} não encontrado.")
    return ApiResponse(status_code=status.HTTP_200_OK, detail="Excluindo cliente: cliente excluído com sucesso")
