"""
Notification Listing Routes

Endpoints:
    GET /api/notifications/{user_id}   - A user's notifications, newest first
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.repositories import NOTIFICATIONS, CollectionRepositoryInterface
from src.services import list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/{user_id}", response_model=list_response_model("notifications"))
def list_notifications(
    user_id: str,
    notification_type: Optional[str] = Query(None, alias="type"),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    params: PageParams = Depends(page_params),
    notifications: CollectionRepositoryInterface = Depends(repository_for(NOTIFICATIONS)),
):
    query = list_filters.user_notifications(
        user_id, notification_type=notification_type, is_read=is_read
    )
    return list_response(notifications, query, params, "notifications")
