"""
Member dashboard endpoint.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from subto.database import get_db
from subto.models.profile import Profile
from subto.schemas.dashboard import DashboardResponse, DashboardStats
from subto.schemas.error import get_error_responses
from subto.schemas.favorite import FavoriteResponse
from subto.schemas.message import MessageResponse
from subto.schemas.profile import ProfileResponse
from subto.schemas.property import PropertyResponse
from subto.services.dashboard import DashboardService
from subto.utils.dependencies import get_current_user


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard",
    description="The caller's listings, saved listings, inbox, unread count and listing totals",
    responses=get_error_responses(401)
)
async def get_dashboard(
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> DashboardResponse:
    dashboard = await DashboardService(db).get_dashboard(current_user)
    return DashboardResponse(
        profile=ProfileResponse.model_validate(dashboard["profile"].to_dict()),
        listings=[PropertyResponse.model_validate(p.to_dict()) for p in dashboard["listings"]],
        favorites=[FavoriteResponse.model_validate(f.to_dict()) for f in dashboard["favorites"]],
        messages=[MessageResponse.model_validate(m.to_dict()) for m in dashboard["messages"]],
        unread_count=dashboard["unread_count"],
        stats=DashboardStats(**dashboard["stats"]),
    )
