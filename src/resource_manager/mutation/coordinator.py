from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from resource_manager.core.capabilities import Identifier, LocalMutators, RemoteCrud, maybe_await
from resource_manager.core.errors import MissingCapabilityError
from resource_manager.core.models import MutationState
from resource_manager.utils.logging import get_logger
from resource_manager.utils.records import is_blank, unwrap

Listener = Callable[[MutationState], None]

ADD = "add"
UPDATE = "update"
DELETE = "delete"


class MutationCoordinator:
    """
    Pairs each remote write with the matching local patch.

    Each operation is a single attempt. A remote failure is re-raised to the
    caller once the busy flag has been released. Missing collaborators make
    add/delete a logged no-op but make update raise, since a dropped update
    would leave the view showing data the server never stored.

    The flags are indicators, not locks: concurrent calls of any kind are
    allowed, and a flag stays set while at least one call of its kind is
    pending.
    """

    def __init__(self, local: LocalMutators, remote: Optional[RemoteCrud] = None):
        self.local = local
        self.remote = remote or RemoteCrud()
        self._pending: Counter = Counter()
        self._listeners: List[Listener] = []
        self.log = get_logger("resource_manager.mutation")

    @property
    def is_adding(self) -> bool:
        return self._pending[ADD] > 0

    @property
    def is_updating(self) -> bool:
        return self._pending[UPDATE] > 0

    @property
    def is_deleting(self) -> bool:
        return self._pending[DELETE] > 0

    @property
    def state(self) -> MutationState:
        return MutationState(
            is_adding=self.is_adding,
            is_updating=self.is_updating,
            is_deleting=self.is_deleting,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for flag changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.state
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                self.log.exception("Mutation listener %r failed", listener)

    @contextmanager
    def _busy(self, kind: str) -> Iterator[None]:
        self._pending[kind] += 1
        self._notify()
        try:
            yield
        finally:
            self._pending[kind] -= 1
            self._notify()

    async def add_item(
        self,
        data: Any,
        result_key: Optional[str] = None,
        on_success: Optional[Callable[[Any], None]] = None,
    ) -> Any:
        """
        Insert remotely, then add the persisted entity to the collection.

        Args:
            data: Payload for the remote insert.
            result_key: Field of the insert response holding the created entity.
            on_success: Called with the persisted entity after the local add.

        Returns:
            The persisted entity, or None if adding is not configured.
        """
        missing = self.remote.missing("insert") + self.local.missing("add_new_data")
        if missing:
            self.log.warning("%s not provided. Skipping add_item.", " and ".join(missing))
            return None

        with self._busy(ADD):
            created = await maybe_await(self.remote.insert_fn(data))
            entity = unwrap(created, result_key)
            self.local.add_new_data(entity)
            if on_success:
                on_success(entity)
        return entity

    async def update_item(self, item_id: Identifier, data: Any, result_key: Optional[str] = None) -> Any:
        """
        Update remotely, then patch the matching record in the collection.

        Raises:
            MissingCapabilityError: If the remote update or local update mutator is missing.
        """
        missing = self.remote.missing("update") + self.local.missing("update_existing_data")
        if missing:
            raise MissingCapabilityError("update_item", missing)
        if is_blank(item_id) or is_blank(data):
            self.log.warning("ID and data are required for update_item. Skipping.")
            return None

        with self._busy(UPDATE):
            updated = await maybe_await(self.remote.update_fn(item_id, data))
            entity = unwrap(updated, result_key)
            if entity is None:
                entity = data
            self.local.update_existing_data(item_id, entity)
        return entity

    async def delete_item(self, item_id: Identifier) -> None:
        """Delete remotely, then drop the matching record from the collection."""
        missing = self.remote.missing("delete") + self.local.missing("delete_existing_data")
        if missing:
            self.log.warning("%s not provided. Skipping delete_item.", " and ".join(missing))
            return
        if is_blank(item_id):
            self.log.warning("ID is required for delete_item. Skipping.")
            return

        with self._busy(DELETE):
            await maybe_await(self.remote.delete_fn(item_id))
            self.local.delete_existing_data(item_id)
