"""
Recruiter Listing Routes

Endpoints:
    GET /api/recruiters/{recruiter_id}/jobs           - Jobs posted by a recruiter
    GET /api/recruiters/{recruiter_id}/applications   - Applications to those jobs
    GET /api/recruiters/{recruiter_id}/search-talents - Talents matching a job or skills
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.json_utils import serialize_document
from src.common.repositories import APPLICATIONS, JOBS, TALENTS, USERS, CollectionRepositoryInterface
from src.services import list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recruiters", tags=["recruiters"])


@router.get("/{recruiter_id}/jobs", response_model=list_response_model("jobs"))
def list_recruiter_jobs(
    recruiter_id: str,
    status: Optional[str] = Query(None),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    query = list_filters.recruiter_jobs(recruiter_id, status=status)
    return list_response(jobs, query, params, "jobs")


@router.get("/{recruiter_id}/applications", response_model=list_response_model("applications"))
def list_recruiter_applications(
    recruiter_id: str,
    status: Optional[str] = Query(None),
    job_id: Optional[str] = Query(None, alias="jobId", description="Restrict to one of the recruiter's jobs"),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
    applications: CollectionRepositoryInterface = Depends(repository_for(APPLICATIONS)),
):
    """Applications across every job the recruiter posted."""
    query = list_filters.recruiter_applications(
        recruiter_id, jobs, status=status, job_id=job_id
    )
    return list_response(applications, query, params, "applications")


@router.get("/{recruiter_id}/search-talents", response_model=list_response_model("talents", "job"))
def search_talents_for_job(
    recruiter_id: str,
    job_id: Optional[str] = Query(None, alias="jobId", description="Match the skills of this job"),
    skills: Optional[str] = Query(None, description="Comma-separated skills, used without jobId"),
    experience: Optional[int] = Query(None, ge=0, description="Minimum years of experience"),
    location: Optional[str] = Query(None, description="User location text"),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
    users: CollectionRepositoryInterface = Depends(repository_for(USERS)),
    talents: CollectionRepositoryInterface = Depends(repository_for(TALENTS)),
):
    """
    Complete public talent profiles for a recruiter.

    **Example:** `/api/recruiters/{id}/search-talents?jobId=...&experience=3`
    """
    query, job = list_filters.talents_for_job(
        recruiter_id,
        jobs,
        users,
        job_id=job_id,
        skills=skills,
        experience=experience,
        location=location,
    )
    response = list_response(talents, query, params, "talents")
    response["data"]["job"] = serialize_document(job) if job else None
    return response
