from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from resource_manager.config_models import ResourceConfig
from resource_manager.core.manager import ResourceManager
from resource_manager.http.client import HttpClient, RequestsHttpClient
from resource_manager.http.rest import RestResource


@dataclass(frozen=True)
class BuiltResource:
    manager: ResourceManager
    rest: RestResource
    client: HttpClient


class ResourceFactory:
    """
    Factory responsible for wiring a configured REST resource into a ResourceManager.
    """

    def __init__(self, client: Optional[HttpClient] = None):
        self.client = client

    def build(self, config: ResourceConfig, on_error: Optional[Callable[[str], None]] = None) -> BuiltResource:
        """
        Build the HTTP client, REST adapter and manager for one resource.

        Args:
            config: The validated resource configuration.
            on_error: Optional fetch-failure callback.

        Returns:
            A container with all built components.
        """
        client = self.client or self._http_client(config)
        rest = self._rest(config, client)

        manager = ResourceManager(
            service_fn=rest.list_page,
            on_error=on_error,
            data_key=config.resource.data_key,
            should_fetch=config.fetch.should_fetch,
            remote=rest.remote(
                insert=config.crud.insert,
                update=config.crud.update,
                delete=config.crud.delete,
            ),
            id_key=config.resource.id_key,
        )
        return BuiltResource(manager=manager, rest=rest, client=client)

    # ---------- Builders (private) ----------

    def _http_client(self, config: ResourceConfig) -> RequestsHttpClient:
        """Create the HTTP client."""
        return RequestsHttpClient(timeout_s=config.resource.timeout_s)

    def _rest(self, config: ResourceConfig, client: HttpClient) -> RestResource:
        """Create the REST adapter for the configured endpoint."""
        res = config.resource
        return RestResource(
            client=client,
            base_url=res.base_url,
            page_param=res.page_param,
            headers=res.headers,
            params=res.params,
            update_method=config.crud.update_method,
        )
