from __future__ import annotations

from typing import Optional


class ResourceManagerError(RuntimeError):
    """Base error for the resource manager."""


class MissingCapabilityError(ResourceManagerError):
    """A required remote or local collaborator was not configured."""

    def __init__(self, operation: str, missing: list[str]):
        self.operation = operation
        self.missing = list(missing)
        super().__init__(f"{' and '.join(self.missing)} not provided. Cannot {operation}.")


class HttpError(ResourceManagerError):
    """Remote service answered with an error status."""

    def __init__(self, status_code: int, url: str, body: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"HTTP {status_code} for {url}")
