from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Union

Identifier = Union[str, int]

InsertFn = Callable[[Any], Awaitable[Any]]
UpdateFn = Callable[[Identifier, Any], Awaitable[Any]]
DeleteFn = Callable[[Identifier], Awaitable[None]]


@dataclass(frozen=True)
class RemoteCrud:
    """Optional remote write operations. A missing one disables its mutation."""

    insert_fn: Optional[InsertFn] = None
    update_fn: Optional[UpdateFn] = None
    delete_fn: Optional[DeleteFn] = None

    def missing(self, kind: str) -> List[str]:
        return [] if getattr(self, f"{kind}_fn") is not None else [f"{kind}_fn"]


@dataclass(frozen=True)
class LocalMutators:
    """Synchronous in-memory patches applied after a remote write succeeds."""

    add_new_data: Optional[Callable[[Any], None]] = None
    update_existing_data: Optional[Callable[[Identifier, Any], None]] = None
    delete_existing_data: Optional[Callable[[Identifier], None]] = None

    def missing(self, attr: str) -> List[str]:
        return [] if getattr(self, attr) is not None else [attr]


async def maybe_await(value: Any) -> Any:
    """Resolve a value returned by a collaborator that may or may not be async."""
    if inspect.isawaitable(value):
        return await value
    return value
