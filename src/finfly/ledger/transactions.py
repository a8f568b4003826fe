"""Transaction ledger: validation, creation, listing and deletion.

Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import (
    TRANSACTION_TYPES,
    VALID_CATEGORIES,
    TransactionEntity,
    TransactionFilter,
    TransactionPage,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MAX_VALUE = Decimal("9999999999.99")
MAX_PAGE_SIZE = 100


class TransactionValidationError(ValueError):
    """Raised when a transaction or filter violates ledger rules."""


@dataclass
class TransactionInput:
    """Input for transaction creation."""

    value: Decimal | float | int | str
    type: str
    category: str
    description: str | None = None
    date: date | None = None


def validate_type(transaction_type: str) -> str:
    if transaction_type not in TRANSACTION_TYPES:
        raise TransactionValidationError('Type must be "income" or "expense"')
    return transaction_type


def validate_category(transaction_type: str, category: str) -> str:
    """Check category belongs to the valid set for its type."""
    valid = VALID_CATEGORIES[validate_type(transaction_type)]
    if category not in valid:
        raise TransactionValidationError(
            f"Invalid category. Valid categories for {transaction_type}: {', '.join(valid)}"
        )
    return category


def normalize_value(value: Decimal | float | int | str) -> Decimal:
    """Parse a monetary value to two decimal places and require it in range.

    The upper bound matches the Numeric(12, 2) column.
    """
    if isinstance(value, bool):
        raise TransactionValidationError("Value must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise TransactionValidationError("Value must be a number") from e
    if not amount.is_finite():
        raise TransactionValidationError("Value must be a number")
    if amount > MAX_VALUE:
        raise TransactionValidationError(f"Value must not exceed {MAX_VALUE}")
    if amount > 0:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise TransactionValidationError("Value must be greater than zero")
    return amount


def validate_filter(filters: TransactionFilter) -> TransactionFilter:
    """Check list filters; a category filter must be valid for any given type."""
    if filters.type is not None:
        validate_type(filters.type)
        if filters.category is not None:
            validate_category(filters.type, filters.category)
    elif filters.category is not None:
        known = {c for categories in VALID_CATEGORIES.values() for c in categories}
        if filters.category not in known:
            raise TransactionValidationError(f"Invalid category: {filters.category}")
    if (
        filters.start_date is not None
        and filters.end_date is not None
        and filters.start_date > filters.end_date
    ):
        raise TransactionValidationError("startDate must not be after endDate")
    return filters


def build_transaction(user_id: str, txn_input: TransactionInput) -> TransactionEntity:
    """Validate input and build a transaction entity.

    Pure function - no database access.

    Raises:
        TransactionValidationError: On an unknown type, a category outside
            the type's valid set, or a non-positive value.
    """
    if not txn_input.type or not txn_input.category or txn_input.value in (None, ""):
        raise TransactionValidationError("Value, type and category are required")

    transaction_type = validate_type(txn_input.type)
    category = validate_category(transaction_type, txn_input.category)
    value = normalize_value(txn_input.value)

    return TransactionEntity(
        transaction_id=str(uuid.uuid4()),
        user_id=user_id,
        value=value,
        type=transaction_type,
        category=category,
        description=(txn_input.description or "").strip(),
        date=txn_input.date or date.today(),
    )


def create_transaction(
    session: DbSession, user_id: str, txn_input: TransactionInput
) -> TransactionEntity:
    """Validate and persist a new transaction for user_id."""
    entity = build_transaction(user_id, txn_input)
    created = repo.create_transaction(session, entity)
    repo.commit(session)
    logger.info(
        "transaction_created user_id=%s transaction_id=%s type=%s category=%s",
        user_id,
        created.transaction_id,
        created.type,
        created.category,
    )
    return created


def list_transactions(
    session: DbSession,
    user_id: str,
    filters: TransactionFilter,
    *,
    page: int = 1,
    limit: int = 10,
) -> TransactionPage:
    """Get one page of the user's transactions matching filters."""
    if page < 1:
        raise TransactionValidationError("page must be at least 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise TransactionValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    validate_filter(filters)
    return repo.page_transactions(session, user_id, filters, page=page, limit=limit)


def delete_transaction(session: DbSession, user_id: str, transaction_id: str) -> bool:
    """Delete a transaction if owned by user_id.

    Returns:
        False if the record does not exist or belongs to another user.
    """
    deleted = repo.delete_transaction_for_user(session, user_id, transaction_id)
    if not deleted:
        logger.info(
            "transaction_delete_not_found user_id=%s transaction_id=%s", user_id, transaction_id
        )
        return False
    repo.commit(session)
    logger.info("transaction_deleted user_id=%s transaction_id=%s", user_id, transaction_id)
    return True
