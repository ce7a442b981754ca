from __future__ import annotations

from typing import Protocol

import requests

from resource_manager.core.errors import HttpError
from resource_manager.core.models import RequestSpec
from resource_manager.http.response import HttpResponse
from resource_manager.utils.logging import get_logger


class HttpClient(Protocol):
    """Protocol for HTTP clients."""

    def send(self, req: RequestSpec) -> HttpResponse: ...


class RequestsHttpClient:
    """HTTP client using the requests library. One attempt per call."""

    def __init__(self, timeout_s: int = 30, session: requests.Session | None = None):
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.log = get_logger("resource_manager.http")

    def send(self, req: RequestSpec) -> HttpResponse:
        """
        Send an HTTP request.

        Raises:
            HttpError: If the server answers with a status >= 400.
            requests.RequestException: On connection errors and timeouts.
        """
        self.log.debug("%s %s params=%s", req.method, req.url, req.params)
        r = self.session.request(
            method=req.method,
            url=req.url,
            headers=req.headers,
            params=req.params,
            json=req.body if isinstance(req.body, (dict, list)) else None,
            data=None if isinstance(req.body, (dict, list)) else req.body,
            timeout=self.timeout_s,
        )
        ct = r.headers.get("Content-Type", "")

        js = None
        if "application/json" in ct and r.content:
            try:
                js = r.json()
            except ValueError:
                self.log.warning("Invalid JSON body from %s", req.url)

        resp = HttpResponse(status_code=r.status_code, headers=dict(r.headers), text=r.text, json=js)
        if not resp.ok:
            self.log.warning("%s %s failed with status %s", req.method, req.url, resp.status_code)
            raise HttpError(resp.status_code, req.url, body=resp.text)
        return resp
