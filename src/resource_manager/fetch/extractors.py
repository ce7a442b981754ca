from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol

from resource_manager.core.models import ExtractionResult

RawResponse = Any


class DataExtractor(Protocol):
    """Protocol for turning a raw service response into an ExtractionResult."""

    def __call__(self, response: RawResponse) -> ExtractionResult: ...


def _lookup(obj: Any, path: str) -> Any:
    """Walk a dotted path ("data" or "result.items") through nested mappings."""
    cur = obj
    for part in path.split("."):
        if isinstance(cur, Mapping):
            cur = cur.get(part)
        else:
            return None
    return cur


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class KeyedExtractor:
    """
    Default extractor.

    Records are read from ``response[data_key]`` and the cursor from
    ``response["pagination"]`` (``total``, ``currentPage``, ``totalPages``).
    Any missing path degrades to an empty list or an unknown cursor field.
    """

    def __init__(self, data_key: str = "data", pagination_key: str = "pagination"):
        self.data_key = data_key
        self.pagination_key = pagination_key

    def __call__(self, response: RawResponse) -> ExtractionResult:
        items = _lookup(response, self.data_key)
        pagination = _lookup(response, self.pagination_key)
        if not isinstance(pagination, Mapping):
            pagination = {}

        return ExtractionResult(
            records=list(items) if isinstance(items, (list, tuple)) else [],
            total_results=_as_int(pagination.get("total")),
            current_page=_as_int(pagination.get("currentPage")),
            total_pages=_as_int(pagination.get("totalPages")),
        )


def from_mapping(fn: Callable[[RawResponse], dict]) -> DataExtractor:
    """
    Adapt a function returning a plain dict into a DataExtractor.

    The dict may use either ``records`` or ``data`` for the record list and
    snake_case or camelCase cursor keys.
    """

    def extract(response: RawResponse) -> ExtractionResult:
        out = fn(response) or {}
        records = out.get("records", out.get("data")) or []
        return ExtractionResult(
            records=list(records),
            total_results=_as_int(out.get("total_results", out.get("totalResults"))),
            current_page=_as_int(out.get("current_page", out.get("currentPage"))),
            total_pages=_as_int(out.get("total_pages", out.get("totalPages"))),
        )

    return extract
