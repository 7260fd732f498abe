from .addresses import Address
from .customers import Customer


__all__ = [
    "Address",
    "Customer",
]
