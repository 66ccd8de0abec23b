"""
Bakery Ledger CLI

Simple command-line interface over the configured SQLite state store.
Every command loads the persisted state into a Bakery facade; commands
that change anything are saved back through the state store observer.

Usage Examples:
    # Load the starter data set into an empty store
    bakery-ledger seed

    # Dashboard figures and low-stock alerts
    bakery-ledger summary
    bakery-ledger low-stock

    # Buy 5 kg of flour at $2.00/kg
    bakery-ledger restock 1 5 kg --cost 2.00

    # Move an order through its statuses
    bakery-ledger set-status o1 Completed

    # Ingredients needed for open orders
    bakery-ledger requirements

    # Export / import a full JSON snapshot
    bakery-ledger export backup.json
    bakery-ledger import backup.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from bakery_ledger.models import OrderStatus, UnitType
from bakery_ledger.services.bakery import Bakery
from bakery_ledger.services.database import initialize_app_database
from bakery_ledger.services.exceptions import ServiceError, UnknownUnit
from bakery_ledger.services.snapshot_service import export_state_to_json, import_state_from_json
from bakery_ledger.services.state_store import (
    StateStoreObserver,
    load_bakery_state,
    save_bakery_state,
)
from bakery_ledger.services.unit_converter import format_cost, format_stock, parse_unit
from bakery_ledger.utils.constants import APP_NAME, UNIT_LABELS
from bakery_ledger.utils.sample_data import load_sample_data


def open_bakery() -> Bakery:
    """Load persisted state into a facade that saves every change."""
    return Bakery(load_bakery_state(), observers=[StateStoreObserver()])


def seed(bakery: Bakery) -> int:
    """Load the sample data set."""
    if bakery.get_ingredients() or bakery.get_products() or bakery.get_orders():
        print("ERROR: Store is not empty; refusing to seed")
        return 1

    counts = load_sample_data(bakery)
    print(
        f"Seeded {counts['ingredients']} ingredients, "
        f"{counts['products']} products, {counts['orders']} orders"
    )
    return 0


def summary(bakery: Bakery) -> int:
    """Print the dashboard figures."""
    report = bakery.get_financial_summary()
    print(f"Revenue:            {format_cost(report.revenue)}")
    print(f"Loss:               {format_cost(report.loss)}")
    print(f"Effectiveness:      {report.effectiveness_rate}%")
    print(f"Orders due today:   {report.orders_today}")
    print(f"Pending orders:     {report.pending_orders}")
    print(f"Low-stock items:    {report.low_stock_count}")
    return 0


def low_stock(bakery: Bakery) -> int:
    """List ingredients at or below their reorder threshold."""
    ingredients = bakery.get_low_stock()
    if not ingredients:
        print("No ingredients are low on stock")
        return 0

    for ingredient in ingredients:
        print(
            f"{ingredient.id:>6}  {ingredient.name:<20} "
            f"{format_stock(ingredient.current_stock, ingredient.unit):>12} "
            f"(min {format_stock(ingredient.min_stock, ingredient.unit)})"
        )
    return 0


def restock(bakery: Bakery, ingredient_id: str, quantity: str, unit: str, cost: Optional[str]) -> int:
    """Record a purchase."""
    ingredient = bakery.restock(ingredient_id, quantity, unit, cost)
    print(
        f"{ingredient.name}: {format_stock(ingredient.current_stock, ingredient.unit)} "
        f"at {format_cost(ingredient.cost_per_unit)}/{ingredient.unit.value}"
    )
    return 0


def set_status(bakery: Bakery, order_id: str, status: str) -> int:
    """Change an order's status."""
    change = bakery.set_order_status(order_id, status)
    print(f"Order {order_id}: {change.previous_status.value} -> {change.new_status.value}")
    for ingredient_id, amount in change.deductions.items():
        ingredient = bakery.get_ingredient(ingredient_id)
        print(f"  used {format_stock(amount, ingredient.unit)} of {ingredient.name}")
    return 0


def requirements(bakery: Bakery) -> int:
    """Print ingredient needs of open orders."""
    rows = bakery.get_production_requirements()
    if not rows:
        print("No open orders")
        return 0

    for row in rows:
        line = (
            f"{row.ingredient_name:<20} need {format_stock(row.total_needed, row.unit):>12}"
            f"  have {format_stock(row.current_stock, row.unit):>12}"
        )
        if row.missing > 0:
            line += f"  MISSING {format_stock(row.missing, row.unit)}"
        print(line)
    return 0


def export_all(bakery: Bakery, output_file: str) -> int:
    """Export a full snapshot to JSON."""
    try:
        path = export_state_to_json(bakery.state, output_file)
    except Exception as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Exported to {path}")
    return 0


def import_all(input_file: str) -> int:
    """Replace the stored state with a JSON snapshot."""
    try:
        state = import_state_from_json(input_file)
        save_bakery_state(state)
    except Exception as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Imported {state!r}")
    return 0


def _unit_arg(value: str) -> UnitType:
    """argparse type for units; matching is case-insensitive like parse_unit()."""
    try:
        return parse_unit(value)
    except UnknownUnit as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bakery-ledger",
        description=f"{APP_NAME} - inventory, recipes and orders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show service log output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("seed", help="Load sample data into an empty store")
    subparsers.add_parser("summary", help="Show revenue, loss and order counts")
    subparsers.add_parser("low-stock", help="List ingredients at or below min stock")
    subparsers.add_parser("requirements", help="Ingredient needs of open orders")

    restock_parser = subparsers.add_parser("restock", help="Record an ingredient purchase")
    restock_parser.add_argument("ingredient_id", help="Ingredient ID")
    restock_parser.add_argument("quantity", help="Amount bought")
    restock_parser.add_argument(
        "unit", type=_unit_arg, help="Unit of the amount: " + ", ".join(UNIT_LABELS.values())
    )
    restock_parser.add_argument(
        "--cost", default=None, help="Price paid per display unit of the ingredient"
    )

    status_parser = subparsers.add_parser("set-status", help="Change an order's status")
    status_parser.add_argument("order_id", help="Order ID")
    status_parser.add_argument(
        "status", choices=[status.value for status in OrderStatus], help="New status"
    )

    export_parser = subparsers.add_parser("export", help="Export all data to JSON")
    export_parser.add_argument("file", help="JSON file path")

    import_parser = subparsers.add_parser("import", help="Replace all data from JSON")
    import_parser.add_argument("file", help="JSON file path")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_app_database()

    try:
        if args.command == "import":
            return import_all(args.file)

        bakery = open_bakery()
        if args.command == "seed":
            return seed(bakery)
        elif args.command == "summary":
            return summary(bakery)
        elif args.command == "low-stock":
            return low_stock(bakery)
        elif args.command == "restock":
            return restock(bakery, args.ingredient_id, args.quantity, args.unit, args.cost)
        elif args.command == "set-status":
            return set_status(bakery, args.order_id, args.status)
        elif args.command == "requirements":
            return requirements(bakery)
        elif args.command == "export":
            return export_all(bakery, args.file)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    except ServiceError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
