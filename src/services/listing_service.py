"""
Listing Service

Runs a paginated query against one collection and shapes the result into
the list-fetch response every endpoint shares:

    {"<resourceKey>": [...], "pagination": {page, limit, total, pages, hasNext, hasPrev}}

Filters are built by src.services.list_filters; this service counts, skips
and limits, then resolves references (recruiter, applicant, job, ...) with
one `$in` lookup per referenced collection.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING

from src.common.error_handling import log_on_exception
from src.common.json_utils import serialize_document
from src.common.pagination import PaginationDescriptor, skip_for
from src.common.repositories import get_repository
from src.common.repositories.base import CollectionRepositoryInterface

logger = logging.getLogger(__name__)

DEFAULT_SORT = [("createdAt", DESCENDING)]

RepositoryResolver = Callable[[str], CollectionRepositoryInterface]


@dataclass(frozen=True)
class Populate:
    """
    Replace the ObjectId stored in `field` with the referenced document.

    A reference whose document no longer exists becomes None.

    Attributes:
        field: Reference field on the listed documents
        collection: Collection the reference points into
        fields: Fields to load from the referenced document (empty = all)
        nested: References to resolve on the loaded documents
    """
    field: str
    collection: str
    fields: Tuple[str, ...] = ()
    nested: Tuple["Populate", ...] = ()

    @property
    def projection(self) -> Optional[Dict[str, int]]:
        if not self.fields:
            return None
        return {name: 1 for name in self.fields}


@dataclass(frozen=True)
class ListQuery:
    """
    A MongoDB query for one listing.

    Attributes:
        filter: MongoDB query filter
        sort: List of (field, direction) tuples
        projection: Fields to include/exclude (None = all)
        populate: References resolved on every returned document
    """
    filter: Dict[str, Any] = field(default_factory=dict)
    sort: List[tuple] = field(default_factory=lambda: list(DEFAULT_SORT))
    projection: Optional[Dict[str, Any]] = None
    populate: Tuple[Populate, ...] = ()


@dataclass
class ListPage:
    """One page of serialized documents plus its pagination descriptor."""
    items: List[Dict[str, Any]]
    pagination: PaginationDescriptor

    def to_response(self, resource_key: str) -> Dict[str, Any]:
        """The `data` object of a list response."""
        return {
            resource_key: self.items,
            "pagination": self.pagination.to_dict(),
        }

    def pluck(self, key: str) -> "ListPage":
        """
        Replace each item by its `key` value, dropping items where it is empty.

        Used when a link collection (saved jobs) is listed but the linked
        documents are what the page shows. Pagination is left unchanged.
        """
        items = [item[key] for item in self.items if item.get(key)]
        return replace(self, items=items)

    def reversed(self) -> "ListPage":
        """Same page with its items in reverse order."""
        return replace(self, items=list(reversed(self.items)))


class ListingService:
    """
    Paginated reads over a collection repository.

    Example:
        service = ListingService(get_repository("jobs"))
        page = service.list_page(ListQuery(filter={"visibility": "public"}), page=2, limit=10)
        page.to_response("jobs")
    """

    def __init__(
        self,
        repository: CollectionRepositoryInterface,
        repositories: Optional[RepositoryResolver] = None,
    ):
        self.repository = repository
        self.repositories = repositories or get_repository

    def list_page(self, query: ListQuery, page: int = 1, limit: int = 10) -> ListPage:
        """
        Fetch one page.

        Args:
            query: Filter, sort, projection and references to populate
            page: 1-indexed page number (>= 1)
            limit: Page size (>= 1)

        Raises:
            ValueError: If page or limit is below 1
            PyMongoError: On database failure (fail-fast)
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        name = self.repository.collection_name
        with log_on_exception(logger, f"list {name}", level=logging.ERROR):
            total = self.repository.count_documents(query.filter)
            documents = self.repository.find(
                query.filter,
                projection=query.projection,
                sort=query.sort,
                limit=limit,
                skip=skip_for(page, limit),
            )
            self.populate(documents, query.populate)

        pagination = PaginationDescriptor.build(page=page, limit=limit, total=total)
        logger.debug(
            f"Listed {name}: page={page} limit={limit} returned={len(documents)} total={total}"
        )
        return ListPage(
            items=[serialize_document(doc) for doc in documents],
            pagination=pagination,
        )

    def populate(self, documents: List[Dict[str, Any]], references: Tuple[Populate, ...]) -> None:
        """Resolve `references` in place on raw documents."""
        for ref in references:
            ids = {
                doc[ref.field] for doc in documents
                if isinstance(doc.get(ref.field), ObjectId)
            }
            if not ids:
                continue

            referenced = self.repositories(ref.collection).find(
                {"_id": {"$in": sorted(ids)}},
                projection=ref.projection,
            )
            if ref.nested:
                self.populate(referenced, ref.nested)
            by_id = {doc["_id"]: doc for doc in referenced}

            for doc in documents:
                if isinstance(doc.get(ref.field), ObjectId):
                    doc[ref.field] = by_id.get(doc[ref.field])
