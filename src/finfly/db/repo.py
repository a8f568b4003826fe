"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
Every transaction and layout query is scoped to an owning user_id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from finfly.db.schema import DashboardLayout, Transaction, User
from finfly.models.domain import (
    LayoutEntity,
    TransactionEntity,
    TransactionFilter,
    TransactionPage,
    UserEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _user_to_entity(user: User) -> UserEntity:
    """Convert SQLAlchemy User to domain entity."""
    return UserEntity(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        password_hash=user.password_hash,
        created_at=user.created_at,
    )


def _transaction_to_entity(txn: Transaction) -> TransactionEntity:
    """Convert SQLAlchemy Transaction to domain entity."""
    return TransactionEntity(
        transaction_id=txn.transaction_id,
        user_id=txn.user_id,
        value=txn.value,
        type=txn.type,
        category=txn.category,
        date=txn.date,
        description=txn.description or "",
        created_at=txn.created_at,
    )


def _layout_to_entity(layout: DashboardLayout) -> LayoutEntity:
    """Convert SQLAlchemy DashboardLayout to domain entity."""
    return LayoutEntity(
        user_id=layout.user_id,
        screen_size=layout.screen_size,
        layout_json=layout.layout_json,
    )


# ============================================================================
# User Repository
# ============================================================================


def get_user(session: DbSession, user_id: str) -> UserEntity | None:
    """Get user by ID."""
    user = session.get(User, user_id)
    return _user_to_entity(user) if user else None


def get_user_by_email(session: DbSession, email: str) -> UserEntity | None:
    """Get user by (normalized) email."""
    user = session.query(User).filter(User.email == email).first()
    return _user_to_entity(user) if user else None


def create_user(session: DbSession, entity: UserEntity) -> UserEntity:
    """Create a new user."""
    user = User(
        user_id=entity.user_id,
        name=entity.name,
        email=entity.email,
        password_hash=entity.password_hash,
    )
    session.add(user)
    session.flush()
    return _user_to_entity(user)


# ============================================================================
# Transaction Repository
# ============================================================================


def _filtered_transactions(user_id: str, filters: TransactionFilter | None):
    """Build the owner-scoped select shared by listing, export and summary."""
    stmt = select(Transaction).where(Transaction.user_id == user_id)
    if filters is None:
        return stmt
    if filters.type is not None:
        stmt = stmt.where(Transaction.type == filters.type)
    if filters.category is not None:
        stmt = stmt.where(Transaction.category == filters.category)
    if filters.start_date is not None:
        stmt = stmt.where(Transaction.date >= filters.start_date)
    if filters.end_date is not None:
        stmt = stmt.where(Transaction.date <= filters.end_date)
    return stmt


def create_transaction(session: DbSession, entity: TransactionEntity) -> TransactionEntity:
    """Create a new transaction."""
    txn = Transaction(
        transaction_id=entity.transaction_id,
        user_id=entity.user_id,
        value=entity.value,
        type=entity.type,
        category=entity.category,
        description=entity.description,
        date=entity.date,
    )
    session.add(txn)
    session.flush()
    return _transaction_to_entity(txn)


def get_transaction_for_user(
    session: DbSession, user_id: str, transaction_id: str
) -> TransactionEntity | None:
    """Get a transaction only if it belongs to user_id."""
    txn = (
        session.query(Transaction)
        .filter(
            Transaction.transaction_id == transaction_id,
            Transaction.user_id == user_id,
        )
        .first()
    )
    return _transaction_to_entity(txn) if txn else None


def list_transactions(
    session: DbSession,
    user_id: str,
    filters: TransactionFilter | None = None,
) -> list[TransactionEntity]:
    """Get all matching transactions, newest first."""
    stmt = _filtered_transactions(user_id, filters).order_by(
        Transaction.date.desc(), Transaction.created_at.desc()
    )
    return [_transaction_to_entity(t) for t in session.scalars(stmt)]


def page_transactions(
    session: DbSession,
    user_id: str,
    filters: TransactionFilter | None,
    *,
    page: int,
    limit: int,
) -> TransactionPage:
    """Get one page of matching transactions plus the total match count."""
    base = _filtered_transactions(user_id, filters)
    total = session.scalar(select(func.count()).select_from(base.subquery())) or 0
    stmt = (
        base.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = [_transaction_to_entity(t) for t in session.scalars(stmt)]
    return TransactionPage(items=items, page=page, limit=limit, total=total)


def delete_transaction_for_user(session: DbSession, user_id: str, transaction_id: str) -> bool:
    """Delete a transaction owned by user_id.

    Returns False when the record is missing or owned by someone else.
    """
    txn = (
        session.query(Transaction)
        .filter(
            Transaction.transaction_id == transaction_id,
            Transaction.user_id == user_id,
        )
        .first()
    )
    if txn is None:
        return False
    session.delete(txn)
    return True


# ============================================================================
# Layout Repository
# ============================================================================


def get_layouts_for_user(session: DbSession, user_id: str) -> list[LayoutEntity]:
    """Get all stored layouts for a user."""
    layouts = (
        session.query(DashboardLayout)
        .filter(DashboardLayout.user_id == user_id)
        .order_by(DashboardLayout.screen_size)
        .all()
    )
    return [_layout_to_entity(layout) for layout in layouts]


def upsert_layout(session: DbSession, entity: LayoutEntity, layout_id: str) -> None:
    """Overwrite the layout for (user, screen size), inserting if absent."""
    existing = (
        session.query(DashboardLayout)
        .filter(
            DashboardLayout.user_id == entity.user_id,
            DashboardLayout.screen_size == entity.screen_size,
        )
        .first()
    )
    if existing:
        existing.layout_json = entity.layout_json
        return
    session.add(
        DashboardLayout(
            layout_id=layout_id,
            user_id=entity.user_id,
            screen_size=entity.screen_size,
            layout_json=entity.layout_json,
        )
    )


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()
