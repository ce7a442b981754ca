from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def identify(record: Any, key: str) -> Any:
    """Read the identifier field of a mapping or attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def with_field(record: Any, key: str, value: Any) -> Any:
    """Return a copy of record with one field set."""
    if isinstance(record, Mapping):
        return {**record, key: value}
    updated = copy.copy(record)
    setattr(updated, key, value)
    return updated


def merge(record: Any, patch: Any) -> Any:
    """Shallow-merge a mapping patch into a mapping record, otherwise replace. A None patch keeps the record."""
    if patch is None:
        return record
    if isinstance(record, Mapping) and isinstance(patch, Mapping):
        return {**record, **patch}
    return patch


def is_blank(value: Any) -> bool:
    """Falsy values (None, 0, False, empty containers) and whitespace-only strings are blank."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def unwrap(response: Any, key: str | None) -> Any:
    """Pick a named field out of a wrapped service response."""
    if not key:
        return response
    if isinstance(response, Mapping):
        return response.get(key)
    return getattr(response, key, None)
