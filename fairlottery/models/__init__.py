from .base import Base

# import models so autoloaders can discover mappers
from .storage import StorageRecord  # noqa: F401
from .order import Order, parse_order_value  # noqa: F401
from .exhibitor import ExhibitorAccount  # noqa: F401

__all__ = [
    "Base",
    "StorageRecord",
    "Order",
    "ExhibitorAccount",
    "parse_order_value",
]
