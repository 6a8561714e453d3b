"""
Job Listing Routes

Endpoints:
    GET /api/jobs                          - Public job board
    GET /api/jobs/search                   - Search active public jobs
    GET /api/jobs/category/{category}      - Active public jobs in a category
    GET /api/jobs/urgent                   - Urgent jobs
    GET /api/jobs/featured                 - Featured jobs
    GET /api/jobs/saved/{talent_id}        - Jobs a talent saved
    GET /api/jobs/{job_id}/applications    - Applications to one job
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.common.repositories import APPLICATIONS, JOBS, SAVED_JOBS, CollectionRepositoryInterface
from src.services import ListPage, list_filters

from ..dependencies import PageParams, list_response, page_params, repository_for
from ..models import list_response_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=list_response_model("jobs"))
def list_jobs(
    status: Optional[str] = Query(None, description="Job status"),
    job_type: Optional[str] = Query(None, alias="type", description="Employment type"),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    """List public jobs, newest first."""
    query = list_filters.public_jobs(status=status, job_type=job_type)
    return list_response(jobs, query, params, "jobs")


@router.get("/search", response_model=list_response_model("jobs"))
def search_jobs(
    q: Optional[str] = Query(None, description="Free text over title, description, category"),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None, description="City substring"),
    job_type: Optional[str] = Query(None, alias="type"),
    skills: Optional[str] = Query(None, description="Comma-separated skills (match any)"),
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    """
    Search active public jobs.

    **Example:** `/api/jobs/search?q=python&skills=django,flask&page=2&limit=12`
    """
    query = list_filters.job_search(
        q=q, category=category, location=location, job_type=job_type, skills=skills
    )
    return list_response(jobs, query, params, "jobs")


@router.get("/category/{category}", response_model=list_response_model("jobs"))
def list_jobs_by_category(
    category: str,
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    return list_response(jobs, list_filters.jobs_by_category(category), params, "jobs")


@router.get("/urgent", response_model=list_response_model("jobs"))
def list_urgent_jobs(
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    return list_response(jobs, list_filters.urgent_jobs(), params, "jobs")


@router.get("/featured", response_model=list_response_model("jobs"))
def list_featured_jobs(
    params: PageParams = Depends(page_params),
    jobs: CollectionRepositoryInterface = Depends(repository_for(JOBS)),
):
    return list_response(jobs, list_filters.featured_jobs(), params, "jobs")


@router.get("/saved/{talent_id}", response_model=list_response_model("jobs"))
def list_saved_jobs(
    talent_id: str,
    params: PageParams = Depends(page_params),
    saved: CollectionRepositoryInterface = Depends(repository_for(SAVED_JOBS)),
):
    """
    Jobs a talent saved, most recently saved first.

    Pagination counts saves; a saved job that was since deleted is left out
    of its page.
    """
    query = list_filters.saved_jobs(talent_id)
    return list_response(saved, query, params, "jobs", transform=_saved_job_documents)


def _saved_job_documents(page: ListPage) -> ListPage:
    return page.pluck("job")


@router.get("/{job_id}/applications", response_model=list_response_model("applications"))
def list_job_applications(
    job_id: str,
    status: Optional[str] = Query(None, description="Application status"),
    params: PageParams = Depends(page_params),
    applications: CollectionRepositoryInterface = Depends(repository_for(APPLICATIONS)),
):
    """Applications received by one job."""
    query = list_filters.job_applications(job_id, status=status)
    return list_response(applications, query, params, "applications")
