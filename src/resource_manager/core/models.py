from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class FetchStatus(str, Enum):
    """Reported loading status of a collection."""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    REFRESHING = "REFRESHING"
    FETCHING_MORE = "FETCHING_MORE"


class FetchMode(str, Enum):
    """Kind of fetch request."""

    INITIAL = "INITIAL"
    REFRESH = "REFRESH"
    MORE = "MORE"

    @property
    def status(self) -> FetchStatus:
        return _MODE_STATUS[self]

    @property
    def replaces(self) -> bool:
        """Whether a successful fetch of this mode replaces the collection."""
        return self is not FetchMode.MORE


_MODE_STATUS = {
    FetchMode.INITIAL: FetchStatus.FETCHING,
    FetchMode.REFRESH: FetchStatus.REFRESHING,
    FetchMode.MORE: FetchStatus.FETCHING_MORE,
}

# Highest priority first; used when modes overlap.
STATUS_PRIORITY: Tuple[FetchMode, ...] = (FetchMode.REFRESH, FetchMode.INITIAL, FetchMode.MORE)


@dataclass
class PageCursor:
    """Pagination position of a collection."""

    page: int = 1
    total_pages: Optional[int] = None
    total_results: Optional[int] = None
    has_next_page: bool = False


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized shape of a raw service response."""

    records: List[Any] = field(default_factory=list)
    total_results: Optional[int] = None
    current_page: Optional[int] = None
    total_pages: Optional[int] = None


@dataclass(frozen=True)
class MutationState:
    """In-flight indicators for each mutation kind."""

    is_adding: bool = False
    is_updating: bool = False
    is_deleting: bool = False


@dataclass(frozen=True)
class FetchSnapshot:
    """Immutable view of a FetchState taken after a transition."""

    data: Tuple[Any, ...]
    error: Optional[str]
    status: FetchStatus
    page: int
    total_pages: Optional[int]
    total_results: Optional[int]
    has_next_page: bool

    @property
    def is_fetching(self) -> bool:
        return self.status is FetchStatus.FETCHING

    @property
    def is_refreshing(self) -> bool:
        return self.status is FetchStatus.REFRESHING

    @property
    def is_fetching_more(self) -> bool:
        return self.status is FetchStatus.FETCHING_MORE


@dataclass(frozen=True)
class RequestSpec:
    """Specification for an HTTP request."""

    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    body: Any = None
