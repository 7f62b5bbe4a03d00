"""Trade-fair order registration and prize drawing."""

from .accounts import AccountRegistry
from .app import FairLottery
from .ledger import OrderLedger
from .models import ExhibitorAccount, Order
from .prize_draw import DrawingEngine, DrawState, eligible
from .state import AppState
from .storage import PersistenceGateway

__all__ = [
    "AccountRegistry",
    "AppState",
    "DrawState",
    "DrawingEngine",
    "ExhibitorAccount",
    "FairLottery",
    "Order",
    "OrderLedger",
    "PersistenceGateway",
    "eligible",
]
