from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from config import config
from db.db import init_db
from db.store import SqlEntityStore
from domain.access_policy import Permission, is_allowed
from domain.directory import DirectoryManager
from domain.inventory import InventoryManager
from domain.ledger_engine import LedgerEngine
from services.description_service import build_default_service
from utils.dashboard_summary import compute_dashboard_summary, render_dashboard_summary
from utils.ledger_report import render_ledger_statement
from utils.seed_demo import DEMO_EMAIL, seed_demo_data

logger = logging.getLogger(__name__)


def build_managers(db_file: Path, *, reset: bool) -> tuple[DirectoryManager, InventoryManager, LedgerEngine]:
    logger.info("Opening DB at %s", db_file)
    store = SqlEntityStore(init_db(db_file=db_file, reset=reset))
    ledger = LedgerEngine(store=store)
    return DirectoryManager(store=store), InventoryManager(store=store, ledger=ledger), ledger


def run_demo(db_file: Path) -> None:
    directory, inventory, ledger = build_managers(db_file, reset=True)
    demo = seed_demo_data(directory=directory, inventory=inventory, ledger=ledger)
    logger.info("Seeded demo organization %s with %d items", demo.owner.org_id, len(demo.item_ids))
    print_summary(db_file, email=demo.owner.email)


def print_summary(db_file: Path, *, email: str) -> None:
    directory, inventory, ledger = build_managers(db_file, reset=False)
    actor = directory.find_by_email(email)
    if actor is None:
        raise SystemExit(f"No actor with email {email}")

    print(f"Signed in as {actor.name} ({actor.role})")
    render_dashboard_summary(compute_dashboard_summary(actor, inventory=inventory, ledger=ledger))
    if is_allowed(actor.role, Permission.VIEW_LEDGER):
        render_ledger_statement(ledger.statement(actor))


def print_description(make: str, model: str, year: int, condition: str) -> None:
    print(build_default_service().produce_description(make, model, year, condition))


def main(argv: Sequence[str] | None = None) -> None:
    settings = config()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    parser = argparse.ArgumentParser(description="Dealer inventory and cash ledger.")
    parser.add_argument("--db", type=Path, default=settings.db_file)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demo", help="Reset the DB, seed the demo organization and print its summary.")

    summary_parser = subparsers.add_parser("summary", help="Print dashboard and ledger for an actor.")
    summary_parser.add_argument("--email", default=DEMO_EMAIL)

    describe_parser = subparsers.add_parser("describe", help="Generate a listing description.")
    describe_parser.add_argument("make")
    describe_parser.add_argument("model")
    describe_parser.add_argument("year", type=int)
    describe_parser.add_argument("condition")

    args = parser.parse_args(argv)
    if args.command == "demo":
        run_demo(args.db)
    elif args.command == "summary":
        print_summary(args.db, email=args.email)
    else:
        print_description(args.make, args.model, args.year, args.condition)


if __name__ == "__main__":
    main()
