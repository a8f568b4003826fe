"""Transactions API endpoints.

POST /transactions - Create transaction
GET /transactions - List transactions (filters + pagination)
DELETE /transactions/{transaction_id} - Delete own transaction
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from finfly.api.deps import get_db_session
from finfly.api.auth import get_current_user
from finfly.core.security import AuthenticatedUser
from finfly.db.repo import DbSession
from finfly.ledger.transactions import (
    TransactionInput,
    TransactionValidationError,
    create_transaction,
    delete_transaction,
    list_transactions,
)
from finfly.models.domain import TransactionFilter
from finfly.models.types import (
    MessageResponse,
    Pagination,
    TransactionCreate,
    TransactionCreatedResponse,
    TransactionListResponse,
    to_transaction_out,
)

router = APIRouter()


@router.post("", response_model=TransactionCreatedResponse, status_code=status.HTTP_201_CREATED)
def post_transaction(
    payload: TransactionCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> TransactionCreatedResponse:
    """Create a transaction for the authenticated user.

    Raises:
        HTTPException: 400 on invalid type, category or value.
    """
    txn_input = TransactionInput(
        value=payload.value,
        type=payload.type,
        category=payload.category,
        description=payload.description,
        date=payload.date,
    )
    try:
        created = create_transaction(session, current_user.user_id, txn_input)
    except TransactionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return TransactionCreatedResponse(
        message="Transaction created successfully",
        transaction=to_transaction_out(created),
    )


@router.get("", response_model=TransactionListResponse)
def get_transactions(
    page: int = Query(1),
    limit: int = Query(10),
    type: str | None = Query(None),
    category: str | None = Query(None),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> TransactionListResponse:
    """List the authenticated user's transactions, newest first."""
    filters = TransactionFilter(
        type=type or None,
        category=category or None,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        result = list_transactions(
            session, current_user.user_id, filters, page=page, limit=limit
        )
    except TransactionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return TransactionListResponse(
        transactions=[to_transaction_out(t) for t in result.items],
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


@router.delete("/{transaction_id}", response_model=MessageResponse)
def remove_transaction(
    transaction_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    """Delete a transaction owned by the authenticated user.

    Raises:
        HTTPException: 404 if missing or owned by another user.
    """
    if not delete_transaction(session, current_user.user_id, transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    return MessageResponse(message="Transaction deleted successfully")
