# main.py
import argparse
import logging

from model import VendingModel, DEFAULT_STEPS
from ontology import MachineStore, DEFAULT_MACHINE_IDS, DEFAULT_STOCK_LEVEL
from rules import flag_low_stock, LOW_STOCK_THRESHOLD


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)-7s %(name)s: %(message)s",
    )


def describe_event(event):
    if hasattr(event, "quantity"):
        return f"{event.category.value} of {event.quantity} for machine {event.machine_id}"
    return f"{event.category.value} for machine {event.machine_id}"


def format_levels(store):
    return [f"Machine {m.machineId} has stock level of {m.stockLevel}" for m in store]


def setup_terminal_reporting(simulation):
    """Print each published event followed by every machine's stock level."""

    def report(model, event):
        print(f"[Step {model.current_step:2d}] event: {describe_event(event)}")
        for line in format_levels(model.store):
            print(f"    {line}")

    simulation.listeners.append(report)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Vending machine stock simulation over a pub/sub bus.")
    ap.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="number of random events to publish")
    ap.add_argument("--seed", type=int, default=None, help="random seed for a reproducible run")
    ap.add_argument("--stock", type=int, default=DEFAULT_STOCK_LEVEL, help="initial stock per machine")
    ap.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = ap.parse_args(argv)
    if args.steps < 0:
        ap.error("--steps must be >= 0")
    return args


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)

    with MachineStore(DEFAULT_MACHINE_IDS, initial_stock=args.stock) as store:
        run_simulation(store, args)
    return 0


def run_simulation(store, args):
    sim = VendingModel(store=store, steps=args.steps, seed=args.seed)
    setup_terminal_reporting(sim)

    print("\nINITIAL STOCK:")
    for line in format_levels(store):
        print(f"  {line}")

    print(f"\nSIMULATION RUNNING ({args.steps} events)...")
    sim.run()

    print("\nSUMMARY:")
    print(f"  Events published: {len(sim.history)}")
    print(f"  Stock alerts observed: {len(sim.warning_subscriber.alerts)}")
    low = flag_low_stock(store)
    if low:
        print(f"  Machines below {LOW_STOCK_THRESHOLD} units: {', '.join(low)}")
    else:
        print("  No machines low on stock")
    return sim


if __name__ == "__main__":
    raise SystemExit(main())
