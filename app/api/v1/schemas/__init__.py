from .customers import CustomerBase, CustomerCreate, CustomerUpdate, Customer

__all__ = [
    "CustomerBase",
    "CustomerCreate",
    "CustomerUpdate",
    "Customer",
]
