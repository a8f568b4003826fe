"""Domain models for Finfly.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Literal


# ============================================================================
# User Domain
# ============================================================================


@dataclass
class UserEntity:
    """Domain model for a registered user."""

    user_id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime | None = None


# ============================================================================
# Transaction Domain
# ============================================================================

TransactionType = Literal["income", "expense"]

TRANSACTION_TYPES: tuple[str, ...] = ("income", "expense")

VALID_CATEGORIES: dict[str, tuple[str, ...]] = {
    "income": ("salary", "freelance", "investment", "gift", "others"),
    "expense": (
        "food",
        "transport",
        "leisure",
        "health",
        "education",
        "shopping",
        "bills",
        "others",
    ),
}


@dataclass
class TransactionEntity:
    """Domain model for a transaction."""

    transaction_id: str
    user_id: str
    value: Decimal
    type: TransactionType
    category: str
    date: date
    description: str = ""
    created_at: datetime | None = None


@dataclass
class TransactionFilter:
    """Optional list/export filters. Date bounds are inclusive."""

    type: TransactionType | None = None
    category: str | None = None
    start_date: date | None = None
    end_date: date | None = None


@dataclass
class TransactionPage:
    """One page of a filtered transaction listing."""

    items: list[TransactionEntity]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


# ============================================================================
# Layout Domain
# ============================================================================


@dataclass
class LayoutEntity:
    """Domain model for a stored dashboard layout."""

    user_id: str
    screen_size: str
    layout_json: str
