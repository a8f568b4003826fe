#!/usr/bin/env python3
"""Seed a demo user with sample transactions and a dashboard layout.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Registers the demo user (or reuses it)
3. Adds a few months of income/expense transactions
4. Saves a default dashboard layout
"""

from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from finfly.core.accounts import register_user  # noqa: E402
from finfly.core.periods import months_before  # noqa: E402
from finfly.dashboard.layouts import save_layouts  # noqa: E402
from finfly.db import repo  # noqa: E402
from finfly.db.session import init_db, session_scope  # noqa: E402
from finfly.ledger.transactions import TransactionInput, create_transaction  # noqa: E402

# Constants
DEMO_DB_URL = f"sqlite:///{PROJECT_ROOT / 'demo.db'}"

# Demo identifiers
DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@finfly.dev"
DEMO_PASSWORD = "demo1234"

# (months ago, day, value, type, category, description)
DEMO_TRANSACTIONS = [
    (0, 5, "5200.00", "income", "salary", "Monthly salary"),
    (0, 7, "1450.00", "expense", "bills", "Rent"),
    (0, 9, "312.40", "expense", "food", "Groceries"),
    (0, 12, "89.90", "expense", "transport", "Fuel"),
    (1, 5, "5200.00", "income", "salary", "Monthly salary"),
    (1, 14, "800.00", "income", "freelance", "Website project"),
    (1, 18, "220.00", "expense", "leisure", "Concert tickets"),
    (2, 5, "5200.00", "income", "salary", "Monthly salary"),
    (2, 21, "150.00", "expense", "health", "Pharmacy"),
    (2, 25, "499.00", "expense", "education", "Online course"),
]

DEMO_LAYOUTS = {
    "lg": [
        {"i": "balance", "x": 0, "y": 0, "w": 4, "h": 2},
        {"i": "income", "x": 4, "y": 0, "w": 4, "h": 2},
        {"i": "expense", "x": 8, "y": 0, "w": 4, "h": 2},
        {"i": "categories", "x": 0, "y": 2, "w": 12, "h": 4},
    ],
    "sm": [
        {"i": "balance", "x": 0, "y": 0, "w": 2, "h": 2},
        {"i": "categories", "x": 0, "y": 2, "w": 2, "h": 4},
    ],
}


def seed_database(database_url: str) -> None:
    """Create the demo user and data if missing."""
    with session_scope(database_url) as session:
        if repo.get_user_by_email(session, DEMO_EMAIL):
            print(f"Demo user already exists: {DEMO_EMAIL}")
            return

        print("Registering demo user...")
        result = register_user(session, DEMO_NAME, DEMO_EMAIL, DEMO_PASSWORD)
        user_id = result.user.user_id

        print("Creating transactions...")
        today = date.today()
        for months_ago, day, value, txn_type, category, description in DEMO_TRANSACTIONS:
            month_start = months_before(today.replace(day=1), months_ago)
            occurred = month_start.replace(day=min(day, today.day) if months_ago == 0 else day)
            created = create_transaction(
                session,
                user_id,
                TransactionInput(
                    value=value,
                    type=txn_type,
                    category=category,
                    description=description,
                    date=occurred,
                ),
            )
            print(f"  Created: {occurred.isoformat()} {txn_type:<7} {category:<10} {created.value}")

        print("Saving dashboard layout...")
        save_layouts(session, user_id, DEMO_LAYOUTS)

        print("Database seeded successfully!")
        print(f"  Login with {DEMO_EMAIL} / {DEMO_PASSWORD}")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Finfly Demo Seeding Script")
    print("=" * 60)

    database_url = os.environ.get("FINFLY_DATABASE_URL", DEMO_DB_URL)

    print(f"\n[1/2] Initializing database: {database_url}")
    init_db(database_url)

    print("\n[2/2] Seeding demo data...")
    seed_database(database_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
