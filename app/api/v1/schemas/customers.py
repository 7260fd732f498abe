from uuid import UUID

from app.core.schemas import Address, AddressInput, BaseSchema


class CustomerBase(BaseSchema):
    nome: str


class CustomerCreate(CustomerBase):
    # Holds only the CEP on input; replaced by the stored Address when saved
    endereco: AddressInput


class CustomerUpdate(CustomerCreate):
    pass


class Customer(CustomerBase):
    id: UUID
    endereco: Address
