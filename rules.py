# rules.py
from events import LowStockWarningEvent, StockLevelOkEvent

LOW_STOCK_THRESHOLD = 3


def is_low_stock(level):
    return level < LOW_STOCK_THRESHOLD


def stock_event_for(machine_id, level):
    """Follow-up event for a machine whose stock just changed."""
    if is_low_stock(level):
        return LowStockWarningEvent(machine_id)
    return StockLevelOkEvent(machine_id)


def flag_low_stock(store):
    """Sync LowStock membership with current levels and return the flagged ids."""
    low_stock = store.onto.LowStock
    flagged = []
    for m in store:
        qty = m.stockLevel if m.stockLevel is not None else 0
        if is_low_stock(qty):
            if low_stock not in m.is_a:
                m.is_a.append(low_stock)
            flagged.append(m.machineId)
        elif low_stock in m.is_a:
            m.is_a.remove(low_stock)
    return flagged
