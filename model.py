# model.py
import logging

from mesa import Model, Agent

from bus import MessageBus, Subscriber
from events import (
    EventType,
    SaleEvent,
    RefillEvent,
    LowStockWarningEvent,
    StockLevelOkEvent,
)
from ontology import MachineStore
from rules import stock_event_for

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 5


class _StockAdjustingSubscriber(Subscriber):
    """Applies a stock delta for the event's machine and reports the new level."""

    def __init__(self, bus, store):
        self.bus = bus
        self.store = store
        self.unknown_subjects = []

    def _delta(self, event):
        raise NotImplementedError

    def handle(self, event):
        machine_id = event.machine_id
        if machine_id not in self.store:
            logger.warning("no matched machine with id: %s (%s ignored)", machine_id, event.category.value)
            self.unknown_subjects.append(machine_id)
            return
        level = self.store.adjust_stock(machine_id, self._delta(event))
        self.bus.publish(stock_event_for(machine_id, level))


class MachineSaleSubscriber(_StockAdjustingSubscriber):
    def _delta(self, event: SaleEvent):
        return -event.quantity


class MachineRefillSubscriber(_StockAdjustingSubscriber):
    def _delta(self, event: RefillEvent):
        return event.quantity


class StockWarningSubscriber(Subscriber):
    """Reports stock-level events; never publishes anything itself."""

    def __init__(self):
        self.alerts = []

    def handle(self, event):
        if isinstance(event, LowStockWarningEvent):
            logger.warning("Low stock warning for machine %s", event.machine_id)
        elif isinstance(event, StockLevelOkEvent):
            logger.info("Stock level OK for machine %s", event.machine_id)
        else:
            logger.debug("ignoring %s event for machine %s", event.category.value, event.machine_id)
            return
        self.alerts.append((event.category, event.machine_id))


def generate_event(rng, machine_ids):
    """Random sale (1 or 2 units) or refill (3 or 5 units), evenly split."""
    machine_ids = list(machine_ids)
    if not machine_ids:
        raise ValueError("no machines to generate events for")
    machine_id = rng.choice(machine_ids)
    if rng.random() < 0.5:
        return SaleEvent(machine_id, rng.choice((1, 2)))
    return RefillEvent(machine_id, rng.choice((3, 5)))


class EventSourceAgent(Agent):
    def __init__(self, model):
        super().__init__(model)
        self.produced = 0

    def step(self):
        event = generate_event(self.model.random, self.model.store.ids())
        self.produced += 1
        self.model.publish(event)


class VendingModel(Model):
    def __init__(self, store=None, steps=DEFAULT_STEPS, seed=None, bus=None):
        super().__init__(seed=seed)
        self.bus = bus if bus is not None else MessageBus()
        self.store = store if store is not None else MachineStore()
        self.max_steps = steps
        self.current_step = 0
        self.history = []
        self.listeners = []

        self.sale_subscriber = MachineSaleSubscriber(self.bus, self.store)
        self.refill_subscriber = MachineRefillSubscriber(self.bus, self.store)
        self.warning_subscriber = StockWarningSubscriber()

        # subscribe consumers
        self.bus.subscribe(EventType.SALE, self.sale_subscriber)
        self.bus.subscribe(EventType.REFILL, self.refill_subscriber)
        self.bus.subscribe(EventType.LOW_STOCK, self.warning_subscriber)
        self.bus.subscribe(EventType.STOCK_OK, self.warning_subscriber)

        # create agents (auto-registered in Mesa 3.x)
        self.source = EventSourceAgent(self)

    def publish(self, event):
        """Publish an externally produced event and notify step listeners."""
        self.bus.publish(event)
        self.history.append(event)
        for listener in self.listeners:
            listener(self, event)

    def step(self):
        self.current_step += 1
        self.agents.shuffle_do("step")

    def run(self):
        for _ in range(self.max_steps):
            self.step()
        return self.history
