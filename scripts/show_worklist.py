#!/usr/bin/env python3
"""
Print the allocation worklist for an owner.
Run with: python scripts/show_worklist.py <owner-id> [search]
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fleetdesk.db.database import SessionLocal
from fleetdesk.db.allocationEngine import load_worklist


def main():
    if len(sys.argv) < 2:
        print("usage: show_worklist.py <owner-id> [search]")
        sys.exit(1)

    owner_id = sys.argv[1]
    search = sys.argv[2] if len(sys.argv) > 2 else None

    db = SessionLocal()
    try:
        legs = load_worklist(db, owner_id, search=search)
    finally:
        db.close()

    print("\n" + "=" * 80)
    print(f"ALLOCATION WORKLIST ({len(legs)} legs)")
    print("=" * 80)

    for leg in legs:
        marker = "✓" if leg.isAllocated else "✗"
        driver = leg.driverName or "-"
        print(
            f"{marker} {leg.dateTime:%d %b, %I:%M %p}  {leg.legType.value:<4}  "
            f"{leg.vehicleName} ({leg.registrationNo})  {leg.location}  driver: {driver}"
        )

    pending = sum(1 for leg in legs if not leg.isAllocated)
    print(f"\n{pending} legs waiting for a driver")
    print("=" * 80 + "\n")


if __name__ == "__main__":
    main()
