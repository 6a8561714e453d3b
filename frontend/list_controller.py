"""
Async controller for one paginated list view.

Each page change builds a request from the explicit ListState, tags it with
a monotonically increasing sequence number, announces it to subscribers as
a ListRequested event, awaits the fetch and applies the result.

Overlapping requests are neither de-duplicated nor cancelled: whichever
response arrives last is applied (last-write-wins). With
`discard_stale=True` a response older than the last applied one is dropped
instead.

Failures never clear the displayed page: the error is logged, recorded,
pushed to the Notifier and stored in `state.error`.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol

from src.common.config import Config
from src.common.error_handling import FetchErrorCollector, ListFetchFailed
from src.common.logger import get_logger
from src.common.structured_logger import StructuredLogger

from .api_client import ListRequest, ListResult, ListState, build_list_request
from .notifications import Notifier


@dataclass(frozen=True)
class ListRequested:
    """Emitted before every fetch."""

    seq: int
    request: ListRequest


class AsyncListFetcher(Protocol):
    async def fetch(self, request: ListRequest, resource_key: str) -> ListResult:
        ...


Subscriber = Callable[[ListRequested], Any]


class ListController:
    """
    Drives a ListState through page changes, filter changes and refreshes.

    Args:
        client: Anything with `async fetch(request, resource_key)`
        state: The list state this controller owns
        notifier: Receives an error notification per failed fetch
        discard_stale: Drop responses older than the last applied one
        events: Structured event sink (enabled by STRUCTURED_EVENTS)
        failure_message: Notification text (default "Failed to load <key>")
    """

    def __init__(
        self,
        client: AsyncListFetcher,
        state: ListState,
        notifier: Optional[Notifier] = None,
        discard_stale: bool = False,
        events: Optional[StructuredLogger] = None,
        failure_message: Optional[str] = None,
    ):
        self.client = client
        self.state = state
        self.notifier = notifier if notifier is not None else Notifier()
        self.discard_stale = discard_stale
        if events is None:
            events = StructuredLogger(resource=state.resource, enabled=Config.STRUCTURED_EVENTS)
        self.events = events
        self.failure_message = failure_message or f"Failed to load {state.resource_key}"
        self.errors = FetchErrorCollector()
        self.logger = get_logger(__name__, resource=state.resource)
        self._subscribers: List[Subscriber] = []
        self._in_flight = 0

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a ListRequested listener; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _announce(self, event: ListRequested) -> None:
        for callback in list(self._subscribers):
            callback(event)

    async def on_page_change(self, page: int) -> bool:
        """
        Fetch `page` and apply it.

        Returns:
            True if the response was applied, False if it failed or was
            discarded as stale
        """
        return await self._fetch(build_list_request(self.state, page=page))

    async def set_filters(self, **filters: Any) -> bool:
        """Merge filters (None removes a key), then fetch page 1."""
        merged = dict(self.state.filters)
        merged.update(filters)
        self.state.filters = {k: v for k, v in merged.items() if v is not None}
        return await self.on_page_change(1)

    async def set_limit(self, limit: int) -> bool:
        """Change the page size, then fetch page 1."""
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self.state.limit = limit
        return await self.on_page_change(1)

    async def refresh(self) -> bool:
        return await self.on_page_change(self.state.page)

    async def _fetch(self, request: ListRequest) -> bool:
        state = self.state
        state.seq += 1
        seq = state.seq

        self._in_flight += 1
        state.loading = True
        self.logger.debug(f"Requesting page {request.page}", seq=seq)
        self.events.requested(seq, request.page, filters=state.filters or None)
        self._announce(ListRequested(seq=seq, request=request))

        try:
            result = await self.client.fetch(request, state.resource_key)
        except ListFetchFailed as e:
            self._on_failure(seq, request, e)
            return False
        finally:
            self._in_flight -= 1
            state.loading = self._in_flight > 0

        if self.discard_stale and seq < state.last_applied_seq:
            self.logger.info(
                f"Discarding stale page {request.page} (last applied req:{state.last_applied_seq})",
                seq=seq,
            )
            self.events.discarded(seq, request.page, state.last_applied_seq)
            return False

        state.items = result.items
        state.pagination = result.pagination
        state.page = result.pagination.page
        state.error = None
        state.last_applied_seq = seq
        self.events.applied(seq, result.pagination.page, result.pagination.total)
        self.logger.debug(
            f"Applied page {result.pagination.page}/{result.pagination.pages} "
            f"({len(result.items)} items)",
            seq=seq,
        )
        return True

    def _on_failure(self, seq: int, request: ListRequest, error: ListFetchFailed) -> None:
        self.logger.error(f"Fetching page {request.page} failed: {error}", seq=seq)
        self.events.failed(seq, request.page, str(error))
        self.errors.add_failure(error, request.page)
        self.state.error = error.user_message
        self.notifier.error(self.failure_message)
