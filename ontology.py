# ontology.py
from owlready2 import World, Thing, DataProperty, FunctionalProperty

ONTOLOGY_IRI = "http://example.org/vending.owl"

DEFAULT_MACHINE_IDS = ("001", "002", "003")
DEFAULT_STOCK_LEVEL = 10


def build_ontology(world=None):
    """Declare the vending vocabulary in a fresh ontology.

    Every store gets its own owlready2 World unless one is passed in, so two
    simulations never share machine individuals.
    """
    world = world if world is not None else World()
    onto = world.get_ontology(ONTOLOGY_IRI)
    with onto:
        # Classes
        class Machine(Thing): pass
        class LowStock(Thing): pass

        # Data properties
        class machineId(DataProperty, FunctionalProperty):  domain = [Machine]; range = [str]
        class stockLevel(DataProperty, FunctionalProperty): domain = [Machine]; range = [int]
    return onto


class MachineStore:
    """Owns the machine individuals; everyone else addresses them by id."""

    def __init__(self, machine_ids=DEFAULT_MACHINE_IDS, initial_stock=DEFAULT_STOCK_LEVEL, world=None):
        self.onto = build_ontology(world)
        self._machines = {}
        for machine_id in machine_ids:
            self.add_machine(machine_id, initial_stock)

    def add_machine(self, machine_id, stock_level=DEFAULT_STOCK_LEVEL):
        if self.closed:
            raise ValueError("store is closed")
        if not isinstance(machine_id, str) or not machine_id.strip():
            raise ValueError("machine id must be a non-empty string")
        if machine_id in self._machines:
            raise ValueError(f"machine {machine_id} already exists")
        with self.onto:
            m = self.onto.Machine(f"Machine_{machine_id}")
            m.machineId = machine_id
            m.stockLevel = int(stock_level)
        self._machines[machine_id] = m
        return m

    def get(self, machine_id):
        return self._machines.get(machine_id)

    def ids(self):
        return list(self._machines)

    def __contains__(self, machine_id):
        return machine_id in self._machines

    def __iter__(self):
        return iter(self._machines.values())

    def __len__(self):
        return len(self._machines)

    def _require(self, machine_id):
        m = self._machines.get(machine_id)
        if m is None:
            raise KeyError(machine_id)
        return m

    def stock_level(self, machine_id):
        return self._require(machine_id).stockLevel

    def set_stock(self, machine_id, level):
        self._require(machine_id).stockLevel = int(level)

    def adjust_stock(self, machine_id, delta):
        """Add delta (negative for sales) and return the new level."""
        m = self._require(machine_id)
        m.stockLevel = m.stockLevel + delta
        return m.stockLevel

    def levels(self):
        return {machine_id: m.stockLevel for machine_id, m in self._machines.items()}

    @property
    def closed(self):
        return self.onto is None

    def close(self):
        """Release the store's World; the store is empty afterwards."""
        if self.onto is None:
            return
        self._machines.clear()
        self.onto.world.close()
        self.onto = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
