#!/usr/bin/env python3
"""Smoke test for the seeded demo database.

Logs in as the demo user through the HTTP API and checks the summary,
listing, export and layout endpoints agree with each other.

Usage:
    python scripts/seed_demo.py
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from fastapi.testclient import TestClient  # noqa: E402

from finfly.api.app import create_app  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_EMAIL = "demo@finfly.dev"
DEMO_PASSWORD = "demo1234"


def check_database_exists() -> bool:
    """Check that demo database exists."""
    if not DEMO_DB_PATH.exists():
        print(f"FAIL: Demo database not found: {DEMO_DB_PATH}")
        return False
    print(f"OK: Database exists: {DEMO_DB_PATH}")
    return True


def login(client: TestClient) -> dict | None:
    """Log in as the demo user and return auth headers."""
    response = client.post("/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    if response.status_code != 200:
        print(f"FAIL: Login returned {response.status_code}: {response.text}")
        return None
    print(f"OK: Logged in as {DEMO_EMAIL}")
    return {"Authorization": f"Bearer {response.json()['token']}"}


def check_summary_balance(client: TestClient, headers: dict) -> bool:
    """Check balance equals income minus expense for the full history."""
    summary = client.get("/summary", params={"period": "all"}, headers=headers).json()["summary"]
    expected = round(summary["totalIncome"] - summary["totalExpense"], 2)
    if round(summary["balance"], 2) != expected:
        print(f"FAIL: balance {summary['balance']} != {expected}")
        return False
    print(f"OK: Balance {summary['balance']:.2f} over {summary['transactionCount']} transactions")
    return True


def check_export_matches_listing(client: TestClient, headers: dict) -> bool:
    """Check JSON export count matches the unfiltered listing total."""
    listing = client.get("/transactions", params={"limit": 1}, headers=headers).json()
    exported = client.get(
        "/transactions/export", params={"type": "json"}, headers=headers
    )
    document = json.loads(exported.text)
    total = listing["pagination"]["total"]
    if document["transactionCount"] != total:
        print(f"FAIL: export has {document['transactionCount']} transactions, listing {total}")
        return False
    print(f"OK: Export count matches listing ({total})")
    return True


def check_layout_saved(client: TestClient, headers: dict) -> bool:
    """Check demo layouts are stored."""
    layouts = client.get("/layout", headers=headers).json()["layouts"]
    if not layouts:
        print("FAIL: No layouts stored")
        return False
    print(f"OK: Layouts stored for {', '.join(sorted(layouts))}")
    return True


def main() -> int:
    """Run all smoke checks."""
    print("=" * 60)
    print("Finfly Demo Smoke Test")
    print("=" * 60)

    if not check_database_exists():
        return 1

    database_url = os.environ.get("FINFLY_DATABASE_URL", f"sqlite:///{DEMO_DB_PATH}")
    client = TestClient(create_app(database_url))

    headers = login(client)
    if headers is None:
        return 1

    results = [
        check_summary_balance(client, headers),
        check_export_matches_listing(client, headers),
        check_layout_saved(client, headers),
    ]

    print()
    if all(results):
        print("All checks passed!")
        return 0
    print(f"{results.count(False)} check(s) failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
