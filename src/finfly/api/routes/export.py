"""Export API endpoint.

GET /transactions/export - Download transactions as CSV or JSON
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from finfly.api.deps import get_db_session
from finfly.api.auth import get_current_user
from finfly.core.periods import PeriodError
from finfly.core.security import AuthenticatedUser
from finfly.db.repo import DbSession
from finfly.export.formatters import ExportFormatError, export_transactions

router = APIRouter()


@router.get("/transactions/export")
def export_data(
    type: str = Query("csv"),
    range: str = Query("all"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Export the authenticated user's transactions as a download.

    Args:
        type: csv (default) or json.
        range: all (default), month, year, last3 or custom.
        start_date: Inclusive start for range=custom.
        end_date: Inclusive end for range=custom.

    Raises:
        HTTPException: 400 for an unsupported type or invalid range.
    """
    try:
        export_file = export_transactions(
            session, current_user, type, range, start_date, end_date
        )
    except (ExportFormatError, PeriodError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return Response(
        content=export_file.content,
        media_type=export_file.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{export_file.filename}"',
            "X-Transaction-Count": str(export_file.transaction_count),
        },
    )
