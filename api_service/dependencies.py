"""
FastAPI dependencies shared by the list routes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Query

from src.common.error_handling import AppError, DatabaseUnavailableError
from src.common.repositories import CollectionRepositoryInterface, get_repository
from src.services.listing_service import ListingService, ListPage, ListQuery

from .config import ApiSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageParams:
    """Validated `page` and `limit` query parameters."""
    page: int
    limit: int


def page_params(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(None, ge=1, description="Items per page"),
    settings: ApiSettings = Depends(get_settings),
) -> PageParams:
    """
    Resolve pagination parameters.

    Raises:
        AppError: 400 if limit exceeds the configured maximum
    """
    if limit is None:
        limit = settings.default_page_limit
    if limit > settings.max_page_limit:
        raise AppError(
            f"limit cannot exceed {settings.max_page_limit}",
            status_code=400,
            code="INVALID_LIMIT",
        )
    return PageParams(page=page, limit=limit)


def repository_for(collection: str) -> Callable[[], CollectionRepositoryInterface]:
    """Dependency factory returning the repository for `collection`."""

    def _dependency() -> CollectionRepositoryInterface:
        try:
            return get_repository(collection)
        except ValueError as e:
            logger.error(f"Repository for '{collection}' unavailable: {e}")
            raise DatabaseUnavailableError()

    _dependency.__name__ = f"{collection}_repository"
    return _dependency


def list_response(
    repository: CollectionRepositoryInterface,
    query: ListQuery,
    params: PageParams,
    resource_key: str,
    transform: Optional[Callable[[ListPage], ListPage]] = None,
) -> Dict[str, Any]:
    """
    Run a listing and wrap it in the success envelope.

    Args:
        transform: Applied to the page before it is rendered
    """
    service = ListingService(repository, repositories=get_repository)
    page = service.list_page(query, page=params.page, limit=params.limit)
    if transform is not None:
        page = transform(page)
    return {"status": "success", "data": page.to_response(resource_key)}
