"""
List-fetch client for the TalentHub list API.

Builds list requests from explicit list state, performs them with
`requests` (Flask frontend) or `httpx` (asyncio list controller), and
parses the success envelope:

    {"status": "success", "data": {"<resource>": [...], "pagination": {...}}}

Every failure (timeout, connection error, non-2xx status, malformed body)
is raised as ListFetchFailed. There is no automatic retry.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import requests

from src.common.config import Config
from src.common.error_handling import ListFetchFailed
from src.common.pagination import PaginationDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ListState:
    """
    Explicit state of one paginated list view.

    `seq` and `last_applied_seq` track request ordering for the controller.
    """

    resource: str
    resource_key: str
    page: int = 1
    limit: int = Config.DEFAULT_PAGE_LIMIT
    filters: Dict[str, Any] = field(default_factory=dict)
    items: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Optional[PaginationDescriptor] = None
    loading: bool = False
    error: Optional[str] = None
    seq: int = 0
    last_applied_seq: int = 0


@dataclass(frozen=True)
class ListRequest:
    """Resource path plus the full query string for one fetch."""

    path: str
    params: Dict[str, Any]

    @property
    def page(self) -> int:
        return int(self.params.get("page", 1))


@dataclass
class ListResult:
    items: List[Dict[str, Any]]
    pagination: PaginationDescriptor


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple)) and not value:
        return True
    return False


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return value


def build_list_request(state: ListState, page: Optional[int] = None) -> ListRequest:
    """
    Build the request for `page` (default: the state's current page).

    Empty filter values are omitted. The state is not modified.
    """
    params: Dict[str, Any] = {
        "page": page if page is not None else state.page,
        "limit": state.limit,
    }
    for key, value in state.filters.items():
        if _is_empty(value):
            continue
        params[key] = _param_value(value)
    return ListRequest(path=state.resource, params=params)


def parse_list_response(payload: Any, resource_key: str, resource: Optional[str] = None) -> ListResult:
    """
    Validate a list envelope and return its items and pagination.

    Raises:
        ListFetchFailed: On an error envelope or a malformed payload
    """
    if not isinstance(payload, dict):
        raise ListFetchFailed("Malformed list response", resource=resource)

    if payload.get("status") == "error":
        raise ListFetchFailed(
            "List request rejected",
            resource=resource,
            server_message=payload.get("message"),
        )
    if payload.get("status") != "success":
        raise ListFetchFailed("Malformed list response: missing status", resource=resource)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise ListFetchFailed("Malformed list response: missing data", resource=resource)

    items = data.get(resource_key)
    if not isinstance(items, list):
        raise ListFetchFailed(
            f"Malformed list response: missing '{resource_key}'", resource=resource
        )

    try:
        pagination = PaginationDescriptor.from_dict(data.get("pagination"))
    except (TypeError, ValueError) as e:
        raise ListFetchFailed(f"Malformed pagination: {e}", resource=resource)

    return ListResult(items=items, pagination=pagination)


def _error_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        return body.get("message") or body.get("detail")
    return None


class ListFetchClient:
    """
    Synchronous list client built on `requests`.

    Used by the Flask frontend to proxy list pages.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.token = token
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, request: ListRequest, resource_key: str) -> ListResult:
        """
        Fetch one page.

        Raises:
            ListFetchFailed: On timeout, connection error, non-2xx or bad body
        """
        url = self._url(request.path)
        logger.debug(f"GET {url} params={request.params}")

        try:
            response = self.session.get(
                url,
                params=request.params,
                headers=Config.auth_header(self.token),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise ListFetchFailed("List API timeout", resource=request.path, status_code=504)
        except requests.exceptions.ConnectionError:
            raise ListFetchFailed(
                "Cannot connect to list API", resource=request.path, status_code=503
            )
        except requests.exceptions.RequestException as e:
            raise ListFetchFailed(f"List request failed: {e}", resource=request.path)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            raise ListFetchFailed(
                f"List API returned {response.status_code}",
                resource=request.path,
                status_code=response.status_code,
                server_message=_error_message(body),
            )
        if body is None:
            raise ListFetchFailed(
                "List API returned a non-JSON body",
                resource=request.path,
                status_code=response.status_code,
            )

        return parse_list_response(body, resource_key, resource=request.path)


class AsyncListFetchClient:
    """
    Asynchronous list client built on `httpx.AsyncClient`.

    Used by ListController. Pass `client` to share a connection pool or to
    inject a mock transport in tests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.token = token
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncListFetchClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def fetch(self, request: ListRequest, resource_key: str) -> ListResult:
        """
        Fetch one page.

        Raises:
            ListFetchFailed: On timeout, connection error, non-2xx or bad body
        """
        url = f"{self.base_url}/{request.path.lstrip('/')}"
        logger.debug(f"GET {url} params={request.params}")

        try:
            response = await self._get_client().get(
                url,
                params=request.params,
                headers=Config.auth_header(self.token),
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            raise ListFetchFailed("List API timeout", resource=request.path, status_code=504)
        except httpx.ConnectError:
            raise ListFetchFailed(
                "Cannot connect to list API", resource=request.path, status_code=503
            )
        except httpx.HTTPError as e:
            raise ListFetchFailed(f"List request failed: {e}", resource=request.path)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            raise ListFetchFailed(
                f"List API returned {response.status_code}",
                resource=request.path,
                status_code=response.status_code,
                server_message=_error_message(body),
            )
        if body is None:
            raise ListFetchFailed(
                "List API returned a non-JSON body",
                resource=request.path,
                status_code=response.status_code,
            )

        return parse_list_response(body, resource_key, resource=request.path)
