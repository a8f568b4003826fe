"""Pydantic models for the Finfly API.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
"""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel

from finfly.models.domain import TransactionEntity


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Auth
# ============================================================================


class RegisterRequest(ApiModel):
    """Registration payload."""

    name: str
    email: EmailStr
    password: str


class LoginRequest(ApiModel):
    """Login payload; the email is matched, not validated."""

    email: str
    password: str


class UserPublic(ApiModel):
    """User fields safe to return to clients."""

    id: str
    name: str
    email: str
    created_at: dt.datetime | None


class AuthResponse(ApiModel):
    """Token plus the authenticated user."""

    message: str
    token: str
    user: UserPublic


# ============================================================================
# Transactions
# ============================================================================


class TransactionCreate(ApiModel):
    """New transaction payload. Type and category are checked by the ledger."""

    value: Decimal
    type: str
    category: str
    description: str | None = None
    date: dt.date | None = None


class TransactionOut(ApiModel):
    """Transaction as returned to clients."""

    id: str
    user_id: str
    value: float
    type: str
    category: str
    description: str
    date: dt.date
    created_at: dt.datetime | None


class TransactionCreatedResponse(ApiModel):
    message: str
    transaction: TransactionOut


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionListResponse(ApiModel):
    transactions: list[TransactionOut]
    pagination: Pagination


class MessageResponse(ApiModel):
    message: str


# ============================================================================
# Summary
# ============================================================================


class PeriodRange(ApiModel):
    start: dt.date | None
    end: dt.date | None


class SummaryTotals(ApiModel):
    """Aggregate totals over the selected period."""

    balance: float
    total_income: float
    total_expense: float
    transaction_count: int
    period: str
    period_range: PeriodRange


class CategoryTotal(ApiModel):
    """Summed value and count for one (category, type) group."""

    category: str
    type: str
    total: float
    count: int


class SummaryResponse(ApiModel):
    summary: SummaryTotals
    by_category: list[CategoryTotal]


# ============================================================================
# Layout
# ============================================================================


class LayoutSaveRequest(ApiModel):
    """Layouts keyed by screen size (e.g. lg, md, sm)."""

    layouts: dict[str, Any]


class LayoutResponse(ApiModel):
    layouts: dict[str, Any]


# ============================================================================
# Export
# ============================================================================


class ExportUser(ApiModel):
    id: str
    email: str


class ExportDocument(ApiModel):
    """JSON export envelope."""

    exported_at: dt.datetime
    user: ExportUser
    transaction_count: int
    transactions: list[TransactionOut]


def to_transaction_out(entity: TransactionEntity) -> TransactionOut:
    """Build the client representation of a transaction."""
    return TransactionOut(
        id=entity.transaction_id,
        user_id=entity.user_id,
        value=float(entity.value),
        type=entity.type,
        category=entity.category,
        description=entity.description,
        date=entity.date,
        created_at=entity.created_at,
    )
