from .address_repository import AddressRepository, get_address_repository
from .customer_repository import CustomerRepository, get_customer_repository

__all__ = [
    "AddressRepository",
    "CustomerRepository",
    "get_address_repository",
    "get_customer_repository",
]
