from .customer_service import CustomerService, get_customer_service

__all__ = [
    "CustomerService",
    "get_customer_service",
]
