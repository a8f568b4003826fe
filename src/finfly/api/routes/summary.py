"""Summary API endpoint.

GET /summary - Totals and per-category breakdown for a period
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from finfly.aggregation.summary import summarize_user
from finfly.api.deps import get_db_session
from finfly.api.auth import get_current_user
from finfly.core.periods import PeriodError
from finfly.core.security import AuthenticatedUser
from finfly.db.repo import DbSession
from finfly.models.types import SummaryResponse

router = APIRouter()


@router.get("", response_model=SummaryResponse)
def get_summary(
    period: str = Query("month"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> SummaryResponse:
    """Get the financial summary for the authenticated user.

    Args:
        period: month (default), year, custom or all.
        start_date: Inclusive start for period=custom.
        end_date: Inclusive end for period=custom.

    Raises:
        HTTPException: 400 if the period or custom bounds are invalid.
    """
    try:
        return summarize_user(session, current_user.user_id, period, start_date, end_date)
    except PeriodError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
