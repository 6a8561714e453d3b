"""
Talent Listing Routes

Endpoints:
    GET /api/talents/search                      - Search public talent profiles
    GET /api/talents/{talent_id}/applications    - Applications a talent submitted
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.repositories import APPLICATIONS, TALENTS, USERS, CollectionRepositoryInterface
from src.services import list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/talents", tags=["talents"])


@router.get("/search", response_model=list_response_model("talents"))
def search_talents(
    q: Optional[str] = Query(None, description="Name or bio text"),
    skills: Optional[str] = Query(None, description="Comma-separated skills (match any)"),
    location: Optional[str] = Query(None),
    availability: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    talents: CollectionRepositoryInterface = Depends(repository_for(TALENTS)),
    users: CollectionRepositoryInterface = Depends(repository_for(USERS)),
):
    """Public talent profiles, most recently updated first."""
    query = list_filters.talent_search(
        users, q=q, skills=skills, location=location, availability=availability
    )
    return list_response(talents, query, params, "talents")


@router.get("/{talent_id}/applications", response_model=list_response_model("applications"))
def list_talent_applications(
    talent_id: str,
    status: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    applications: CollectionRepositoryInterface = Depends(repository_for(APPLICATIONS)),
):
    query = list_filters.talent_applications(talent_id, status=status)
    return list_response(applications, query, params, "applications")
