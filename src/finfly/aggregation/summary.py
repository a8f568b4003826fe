"""Financial summary aggregation.

Computes totals, balance and per-(category, type) sums for a user's
transactions inside a period. Domain logic is pure - database
operations go through repo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from finfly.core.periods import SUMMARY_PERIODS, DateRange, resolve_period
from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import TransactionEntity, TransactionFilter
from finfly.models.types import CategoryTotal, PeriodRange, SummaryResponse, SummaryTotals

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class CategoryBucket:
    """Running total for one (category, type) group."""

    category: str
    type: str
    total: Decimal = ZERO
    count: int = 0


@dataclass
class Totals:
    """Exact aggregate over a transaction set."""

    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    transaction_count: int = 0
    buckets: dict[tuple[str, str], CategoryBucket] = field(default_factory=dict)

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


def summarize_user(
    session: DbSession,
    user_id: str,
    period: str = "month",
    start: date | None = None,
    end: date | None = None,
    *,
    today: date | None = None,
) -> SummaryResponse:
    """Compute the financial summary for a user over a period.

    Args:
        session: Database session.
        user_id: Owner whose transactions are summarized.
        period: One of month, year, custom, all.
        start: Custom start date (period="custom").
        end: Custom end date (period="custom").
        today: Reference date for month/year bounds.

    Returns:
        SummaryResponse with totals and the per-category breakdown.

    Raises:
        PeriodError: If the period is unknown or custom bounds are invalid.
    """
    date_range = resolve_period(period, start, end, today=today, allowed=SUMMARY_PERIODS)
    filters = TransactionFilter(start_date=date_range.start, end_date=date_range.end)
    transactions = repo.list_transactions(session, user_id, filters)

    logger.info(
        "summary_computed user_id=%s period=%s start=%s end=%s transactions=%d",
        user_id,
        period,
        date_range.start,
        date_range.end,
        len(transactions),
    )

    return _build_response(compute_totals(transactions), period, date_range)


def compute_totals(transactions: list[TransactionEntity]) -> Totals:
    """Reduce transactions to totals and (category, type) buckets.

    Pure function - no database access.
    """
    totals = Totals()

    for txn in transactions:
        totals.transaction_count += 1
        if txn.type == "income":
            totals.total_income += txn.value
        elif txn.type == "expense":
            totals.total_expense += txn.value

        key = (txn.category, txn.type)
        bucket = totals.buckets.get(key)
        if bucket is None:
            bucket = CategoryBucket(category=txn.category, type=txn.type)
            totals.buckets[key] = bucket
        bucket.total += txn.value
        bucket.count += 1

    return totals


def _build_response(totals: Totals, period: str, date_range: DateRange) -> SummaryResponse:
    """Convert exact totals to the API payload."""
    by_category = [
        CategoryTotal(
            category=bucket.category,
            type=bucket.type,
            total=float(bucket.total),
            count=bucket.count,
        )
        for bucket in sorted(totals.buckets.values(), key=lambda b: (b.type, b.category))
    ]

    return SummaryResponse(
        summary=SummaryTotals(
            balance=float(totals.balance),
            total_income=float(totals.total_income),
            total_expense=float(totals.total_expense),
            transaction_count=totals.transaction_count,
            period=period,
            period_range=PeriodRange(start=date_range.start, end=date_range.end),
        ),
        by_category=by_category,
    )
