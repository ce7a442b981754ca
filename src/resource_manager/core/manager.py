from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from resource_manager.core.capabilities import RemoteCrud
from resource_manager.fetch.extractors import DataExtractor, KeyedExtractor
from resource_manager.fetch.state import FetchState, ServiceFn
from resource_manager.mutation.coordinator import MutationCoordinator
from resource_manager.utils.logging import get_logger


@dataclass(frozen=True)
class QueryActions:
    """Read-side operations of a resource."""

    fetch_data: Callable[..., Awaitable[None]]
    refetch_data: Callable[[], Awaitable[None]]
    fetch_next_page: Callable[[], Awaitable[None]]


class ResourceManager:
    """
    Combines a FetchState (list path) with a MutationCoordinator (write path).

    The coordinator's local side is the FetchState's own mutators, so a
    successful add/update/delete shows up in the same collection the list
    view renders from.
    """

    def __init__(
        self,
        service_fn: ServiceFn,
        data_extractor: Optional[DataExtractor] = None,
        on_error: Optional[Callable[[str], None]] = None,
        data_key: str = "data",
        should_fetch: bool = True,
        remote: Optional[RemoteCrud] = None,
        id_key: str = "id",
    ):
        """
        Args:
            service_fn: Paginated read call, invoked with ``{"page": n}``.
            data_extractor: Custom extractor; defaults to KeyedExtractor(data_key).
            on_error: Optional callback for fetch failures.
            data_key: Response field holding the records when no extractor is given.
            should_fetch: Whether start() performs the initial load.
            remote: Remote write operations; missing ones disable their mutation.
            id_key: Record field identifying a record.
        """
        self.data_key = data_key
        self.should_fetch = should_fetch
        self.log = get_logger("resource_manager.manager")

        extractor = data_extractor or KeyedExtractor(data_key)
        self.state = FetchState(service_fn, extractor, on_error=on_error, id_key=id_key)
        self.queries = QueryActions(
            fetch_data=self.state.fetch_data,
            refetch_data=self.state.refetch_data,
            fetch_next_page=self.state.fetch_next_page,
        )
        self.crud = MutationCoordinator(local=self.state.local_mutators(), remote=remote)

    async def start(self) -> None:
        """Perform the initial load if should_fetch is set."""
        if not self.should_fetch:
            self.log.debug("Initial fetch disabled")
            return
        await self.queries.fetch_data()

    def subscribe(self, listener: Callable[[Any], None]) -> Callable[[], None]:
        """
        Register one listener for both collection and mutation-flag changes.

        It receives a FetchSnapshot or a MutationState. Returns a function
        that unregisters it from both.
        """
        off_state = self.state.subscribe(listener)
        off_crud = self.crud.subscribe(listener)

        def unsubscribe() -> None:
            off_state()
            off_crud()

        return unsubscribe
