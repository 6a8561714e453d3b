"""
Admin Listing Routes

All endpoints require the shared bearer secret when authentication is on.

Endpoints:
    GET /api/admin/users   - Users by role, status and search text
    GET /api/admin/jobs    - Every job regardless of visibility
    GET /api/admin/notifications - Notifications across all users
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.repositories import JOBS, NOTIFICATIONS, USERS, CollectionRepositoryInterface
from src.services import list_filters

from ..auth import verify_token
from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(verify_token)],
)


@router.get("/users", response_model=list_response_model("users"))
def list_users(
    role: Optional[str] = Query(None, description="talent, recruiter or admin"),
    status: Optional[str] = Query(None, description="active or inactive"),
    search: Optional[str] = Query(None, description="Name or email text"),
    params: PageParams = Depends(page_params),
    users: CollectionRepositoryInterface = Depends(repository_for(USERS)),
):
    query = list_filters.admin_users(role=role, status=status, search=search)
    return list_response(users, query, params, "users")


@router.get("/jobs", response_model=list_response_model("jobs"))
def list_all_jobs(
    status: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    return list_response(jobs, list_filters.admin_jobs(status=status), params, "jobs")


@router.get("/notifications", response_model=list_response_model("notifications"))
def list_all_notifications(
    notification_type: Optional[str] = Query(None, alias="type", description="Notification type"),
    params: PageParams = Depends(page_params),
    notifications: CollectionRepositoryInterface = Depends(repository_for(NOTIFICATIONS)),
):
    query = list_filters.admin_notifications(notification_type=notification_type)
    return list_response(notifications, query, params, "notifications")
