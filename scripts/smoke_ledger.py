"""
Manual smoke runner for the lending ledger.

Plays the two reference scenarios against an in-process ledger with a
fixed clock and prints the resulting records as JSON.

Usage:
    pip install -e . && python scripts/smoke_ledger.py
    python scripts/smoke_ledger.py --fine-rate 25 --lease-days 7 --verbose
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import datetime, timedelta, timezone

from core.bootstrap import build_ledger
from core.commands.errors import CommandRejectedError
from core.config import LendingPolicy
from core.time import FixedClock


def _print_case(label: str, payload) -> None:
    print(f"\n[{label}]")
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def run_late_return_scenario(policy: LendingPolicy) -> None:
    clock = FixedClock(datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc))
    ledger = build_ledger("admin", policy=policy, clock=clock)
    ledger.subscribe(
        "lending.penalty.accrued.v1",
        lambda event: _print_case("notification", event.to_dict()),
        subscriber_name="smoke",
    )

    ledger.enroll_participant("admin", "P")
    item_id = ledger.add_item("admin", "Book A", "A. Author", "Fiction")
    ledger.borrow("P", item_id)
    _print_case("borrowed", asdict(ledger.get_participant("P")))

    clock.advance(policy.lease_duration + policy.overdue_unit)
    ledger.return_item("P")
    _print_case("returned late", asdict(ledger.get_participant("P")))
    _print_case("item", asdict(ledger.get_item(item_id)))

    ledger.pay_penalty("P")
    _print_case("after payment", asdict(ledger.get_participant("P")))
    ledger.check_invariants()


def run_retire_scenario(policy: LendingPolicy) -> None:
    ledger = build_ledger("admin", policy=policy)
    ledger.enroll_librarian("admin", "L")
    ledger.add_item("L", "Filler", "Nobody", "Misc")
    item_id = ledger.add_item("L", "Book B", "B. Author", "Reference")
    ledger.retire_item("admin", item_id)
    _print_case("retired", asdict(ledger.get_item(item_id)))

    try:
        ledger.retire_item("admin", item_id)
    except CommandRejectedError as exc:
        _print_case("retire again", exc.reason.to_dict())
    ledger.check_invariants()


def main() -> None:
    parser = argparse.ArgumentParser(description="Lending ledger smoke run")
    parser.add_argument("--fine-rate", type=int, default=None)
    parser.add_argument("--lease-days", type=float, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {}
    if args.fine_rate is not None:
        overrides["fine_rate_per_unit"] = args.fine_rate
    if args.lease_days is not None:
        overrides["lease_days"] = args.lease_days
    policy = LendingPolicy.from_mapping(overrides)

    run_late_return_scenario(policy)
    run_retire_scenario(policy)


if __name__ == "__main__":
    main()
