from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from resource_manager.core.capabilities import Identifier, RemoteCrud
from resource_manager.core.models import RequestSpec
from resource_manager.http.client import HttpClient

UPDATE_METHODS = ("PATCH", "PUT")


class RestResource:
    """
    Exposes a REST collection endpoint as a service function plus RemoteCrud.

    ``GET {base_url}?{page_param}=n`` lists, ``POST {base_url}`` inserts,
    ``PATCH|PUT {base_url}/{id}`` updates and ``DELETE {base_url}/{id}``
    deletes. The blocking client runs in a worker thread.
    """

    def __init__(
        self,
        client: HttpClient,
        base_url: str,
        page_param: str = "page",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        update_method: str = "PATCH",
    ):
        method = update_method.upper()
        if method not in UPDATE_METHODS:
            raise ValueError(f"update_method must be one of {UPDATE_METHODS}, got {update_method!r}")
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.page_param = page_param
        self.headers = dict(headers or {})
        self.params = dict(params or {})
        self.update_method = method

    def _item_url(self, item_id: Identifier) -> str:
        return f"{self.base_url}/{item_id}"

    async def _send(self, req: RequestSpec) -> Any:
        resp = await asyncio.to_thread(self.client.send, req)
        return resp.json

    async def list_page(self, params: Dict[str, Any]) -> Any:
        """Service function: fetch one page of the collection."""
        query = {**self.params, self.page_param: params["page"]}
        return await self._send(RequestSpec(url=self.base_url, headers=self.headers, params=query))

    async def insert(self, data: Any) -> Any:
        return await self._send(RequestSpec(url=self.base_url, method="POST", headers=self.headers, body=data))

    async def update(self, item_id: Identifier, data: Any) -> Any:
        return await self._send(
            RequestSpec(url=self._item_url(item_id), method=self.update_method, headers=self.headers, body=data)
        )

    async def delete(self, item_id: Identifier) -> None:
        await self._send(RequestSpec(url=self._item_url(item_id), method="DELETE", headers=self.headers))

    def remote(self, insert: bool = True, update: bool = True, delete: bool = True) -> RemoteCrud:
        """Build the RemoteCrud for this endpoint, leaving out disabled operations."""
        return RemoteCrud(
            insert_fn=self.insert if insert else None,
            update_fn=self.update if update else None,
            delete_fn=self.delete if delete else None,
        )
