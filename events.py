# events.py
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class EventType(str, Enum):
    SALE      = "sale"
    REFILL    = "refill"
    LOW_STOCK = "lowStock"
    STOCK_OK  = "stockOk"


@dataclass(frozen=True)
class Event:
    """Base of every event variant: what happened (category) to which machine."""

    category: ClassVar[EventType]

    machine_id: str

    def __post_init__(self):
        if not hasattr(type(self), "category"):
            raise TypeError(f"{type(self).__name__} has no category; construct a concrete event variant")
        if not isinstance(self.machine_id, str) or not self.machine_id.strip():
            raise ValueError("machine_id must be a non-empty string")

    @property
    def subject_id(self):
        return self.machine_id


@dataclass(frozen=True)
class _QuantityEvent(Event):
    quantity: int

    def __post_init__(self):
        super().__post_init__()
        # bool is an int subclass, reject it explicitly
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool) or self.quantity <= 0:
            raise ValueError(f"quantity must be a positive integer, got {self.quantity!r}")


@dataclass(frozen=True)
class SaleEvent(_QuantityEvent):
    """Units sold from a machine."""

    category: ClassVar[EventType] = EventType.SALE


@dataclass(frozen=True)
class RefillEvent(_QuantityEvent):
    """Units added to a machine."""

    category: ClassVar[EventType] = EventType.REFILL


@dataclass(frozen=True)
class LowStockWarningEvent(Event):
    category: ClassVar[EventType] = EventType.LOW_STOCK


@dataclass(frozen=True)
class StockLevelOkEvent(Event):
    category: ClassVar[EventType] = EventType.STOCK_OK
