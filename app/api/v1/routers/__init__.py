from . import customers

__all__ = [
    "customers",
]
