"""
User Directory Routes

Endpoints:
    GET /api/users/search   - Active users by name, email and role
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.repositories import USERS, CollectionRepositoryInterface
from src.services import list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/search", response_model=list_response_model("users"))
def search_users(
    q: Optional[str] = Query(None, description="Name or email text"),
    role: Optional[str] = Query(None, description="talent, recruiter or admin"),
    params: PageParams = Depends(page_params),
    users: CollectionRepositoryInterface = Depends(repository_for(USERS)),
):
    return list_response(users, list_filters.user_search(q=q, role=role), params, "users")
