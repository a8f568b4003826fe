"""Layout API endpoints.

POST /layout - Save dashboard layouts per screen size
GET /layout - Load dashboard layouts
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from finfly.api.deps import get_db_session
from finfly.api.auth import get_current_user
from finfly.core.security import AuthenticatedUser
from finfly.dashboard.layouts import LayoutError, load_layouts, save_layouts
from finfly.db.repo import DbSession
from finfly.models.types import LayoutResponse, LayoutSaveRequest, MessageResponse

router = APIRouter()


@router.post("", response_model=MessageResponse)
def post_layout(
    payload: LayoutSaveRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> MessageResponse:
    try:
        save_layouts(session, current_user.user_id, payload.layouts)
    except LayoutError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return MessageResponse(message="Layout saved successfully")


@router.get("", response_model=LayoutResponse)
def get_layout(
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> LayoutResponse:
    """Load saved layouts; users without any get an empty mapping."""
    return LayoutResponse(layouts=load_layouts(session, current_user.user_id))
