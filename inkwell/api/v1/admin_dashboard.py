"""Admin landing page counters."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inkwell.api.v1.deps import get_session, require_permission
from inkwell.core.database import get_db
from inkwell.schemas.dashboard import DashboardResponse
from inkwell.services import sessions
from inkwell.services.dashboard import site_stats
from inkwell.services.rbac import ADMIN_ACCESS
from inkwell.services.sessions import SessionHandle

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    _user_id: Annotated[int, Depends(require_permission(ADMIN_ACCESS))],
    session: Annotated[SessionHandle, Depends(get_session)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardResponse:
    return DashboardResponse(
        username=session.get(sessions.USERNAME),
        principal_role=session.get(sessions.PRINCIPAL_ROLE),
        **site_stats(db),
    )
