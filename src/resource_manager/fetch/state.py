from __future__ import annotations

from collections import Counter
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from resource_manager.core.capabilities import Identifier, LocalMutators, maybe_await
from resource_manager.core.models import (
    STATUS_PRIORITY,
    ExtractionResult,
    FetchMode,
    FetchSnapshot,
    FetchStatus,
    PageCursor,
)
from resource_manager.fetch.extractors import DataExtractor, RawResponse
from resource_manager.utils.logging import get_logger
from resource_manager.utils.records import identify, merge, with_field

ServiceFn = Callable[[Dict[str, Any]], Union[Awaitable[RawResponse], RawResponse]]
Listener = Callable[[FetchSnapshot], None]

DEFAULT_ERROR_MESSAGE = "Failed to fetch data"


class FetchState:
    """
    Owns a paginated collection and its loading state.

    The collection is only changed by ``fetch_data`` and the local mutators
    below. Every transition notifies subscribed listeners with a fresh
    FetchSnapshot.

    Overlapping fetches: a replacing fetch (initial or refresh) starts a new
    generation. Results of fetches started in an older generation are
    dropped when they complete, so a slow page never lands on top of a
    newer reload.
    """

    def __init__(
        self,
        service_fn: ServiceFn,
        data_extractor: DataExtractor,
        on_error: Optional[Callable[[str], None]] = None,
        id_key: str = "id",
    ):
        """
        Args:
            service_fn: Paginated read call, invoked with ``{"page": n}``.
            data_extractor: Maps a raw response to an ExtractionResult.
            on_error: Optional callback notified with the message of a failed fetch.
            id_key: Record field used to match records in the local mutators.
        """
        self.service_fn = service_fn
        self.data_extractor = data_extractor
        self.on_error = on_error
        self.id_key = id_key

        self._data: List[Any] = []
        self._error: Optional[str] = None
        self._cursor = PageCursor()
        self._in_flight: Counter = Counter()
        self._generation = 0
        self._listeners: List[Listener] = []
        self.log = get_logger("resource_manager.fetch")

    # ---------- Read surface ----------

    @property
    def data(self) -> List[Any]:
        return list(self._data)

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def page(self) -> int:
        return self._cursor.page

    @property
    def total_pages(self) -> Optional[int]:
        return self._cursor.total_pages

    @property
    def total_results(self) -> Optional[int]:
        return self._cursor.total_results

    @property
    def has_next_page(self) -> bool:
        return self._cursor.has_next_page

    @property
    def status(self) -> FetchStatus:
        for mode in STATUS_PRIORITY:
            if self._in_flight[mode] > 0:
                return mode.status
        return FetchStatus.IDLE

    @property
    def is_fetching(self) -> bool:
        return self.status is FetchStatus.FETCHING

    @property
    def is_refreshing(self) -> bool:
        return self.status is FetchStatus.REFRESHING

    @property
    def is_fetching_more(self) -> bool:
        return self.status is FetchStatus.FETCHING_MORE

    @property
    def in_flight(self) -> bool:
        return any(count > 0 for count in self._in_flight.values())

    def snapshot(self) -> FetchSnapshot:
        """Capture the current state as an immutable value."""
        return FetchSnapshot(
            data=tuple(self._data),
            error=self._error,
            status=self.status,
            page=self._cursor.page,
            total_pages=self._cursor.total_pages,
            total_results=self._cursor.total_results,
            has_next_page=self._cursor.has_next_page,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                self.log.exception("State listener %r failed", listener)

    # ---------- Queries ----------

    async def fetch_data(self, refresh: bool = False, page: Optional[int] = None, more: bool = False) -> None:
        """
        Load one page from the service.

        Args:
            refresh: Reload from page 1 and replace the collection. Never rejected.
            page: Page to request; defaults to the current page.
            more: Append the page to the collection instead of replacing it.
        """
        mode = FetchMode.REFRESH if refresh else FetchMode.MORE if more else FetchMode.INITIAL
        if mode is not FetchMode.REFRESH and self._in_flight[mode] > 0:
            self.log.debug("Fetch skipped: %s already in flight", mode.value)
            return

        requested = 1 if refresh else (page if page is not None else self._cursor.page)
        if mode.replaces:
            self._generation += 1
        generation = self._generation

        self._in_flight[mode] += 1
        self._error = None
        self._notify()

        try:
            self.log.info("Fetching page %s (mode=%s)", requested, mode.value)
            response = await maybe_await(self.service_fn({"page": requested}))
            result = self.data_extractor(response)
        except Exception as e:
            if generation != self._generation:
                self.log.debug("Ignoring failure of superseded fetch (page=%s): %s", requested, e)
            else:
                message = str(e) or DEFAULT_ERROR_MESSAGE
                self._error = message
                self.log.warning("Fetch failed (mode=%s, page=%s): %s", mode.value, requested, message)
                if self.on_error:
                    self.on_error(message)
        else:
            if generation != self._generation:
                self.log.debug("Discarding superseded page %s (mode=%s)", requested, mode.value)
            else:
                self._apply(mode, requested, result)
        finally:
            self._in_flight[mode] -= 1
            self._notify()

    async def refetch_data(self) -> None:
        """Reload the collection from page 1."""
        await self.fetch_data(refresh=True)

    async def fetch_next_page(self) -> None:
        """Append the next page, if there is one and nothing is loading."""
        if not self._cursor.has_next_page or self.in_flight:
            return
        await self.fetch_data(more=True, page=self._cursor.page + 1)

    def _apply(self, mode: FetchMode, requested: int, result: ExtractionResult) -> None:
        records = list(result.records)
        if mode.replaces:
            self._data = records
        else:
            self._data.extend(records)

        cursor = self._cursor
        cursor.page = result.current_page if result.current_page is not None else requested
        if result.total_pages is not None:
            cursor.total_pages = result.total_pages
        if result.total_results is not None:
            cursor.total_results = result.total_results

        if cursor.total_pages is not None:
            cursor.has_next_page = cursor.page < cursor.total_pages
        else:
            cursor.has_next_page = len(records) > 0

        self.log.info(
            "Page %s loaded: records=%d collection=%d has_next=%s",
            cursor.page,
            len(records),
            len(self._data),
            cursor.has_next_page,
        )

    # ---------- Local mutators ----------

    def add_new_data(self, item: Any, prepend: bool = True) -> None:
        """Insert one record at the top (default) or bottom of the collection."""
        if prepend:
            self._data.insert(0, item)
        else:
            self._data.append(item)
        self._notify()

    def update_existing_data(self, item_id: Identifier, new_data: Any) -> None:
        """Replace the record(s) whose identifier equals item_id."""
        self._data = [
            merge(r, new_data) if identify(r, self.id_key) == item_id else r
            for r in self._data
        ]
        self._notify()

    def update_existing_data_with_key(
        self,
        match_id: Any,
        key_to_update: str,
        new_value: Any,
        match_key: Optional[str] = None,
    ) -> None:
        """Set one field on the record(s) matching match_id on match_key (or the id field)."""
        key = match_key or self.id_key
        self._data = [
            with_field(r, key_to_update, new_value) if identify(r, key) == match_id else r
            for r in self._data
        ]
        self._notify()

    def delete_existing_data(self, item_id: Identifier) -> None:
        """Remove every record whose identifier equals item_id."""
        self._data = [r for r in self._data if identify(r, self.id_key) != item_id]
        self._notify()

    def local_mutators(self) -> LocalMutators:
        """Expose the mutators as a capability struct for a MutationCoordinator."""
        return LocalMutators(
            add_new_data=self.add_new_data,
            update_existing_data=self.update_existing_data,
            delete_existing_data=self.delete_existing_data,
        )

    # ---------- Raw setters ----------

    def set_data(self, data: List[Any]) -> None:
        self._data = list(data)
        self._notify()

    def set_error(self, error: Optional[str]) -> None:
        self._error = error
        self._notify()

    def set_page(self, page: int) -> None:
        self._cursor.page = page
        self._notify()

    def set_has_next_page(self, has_next_page: bool) -> None:
        self._cursor.has_next_page = has_next_page
        self._notify()

    def set_total_results(self, total_results: Optional[int]) -> None:
        self._cursor.total_results = total_results
        self._notify()

    def set_total_pages(self, total_pages: Optional[int]) -> None:
        self._cursor.total_pages = total_pages
        self._notify()
