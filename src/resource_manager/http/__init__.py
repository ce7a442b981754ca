from resource_manager.http.client import HttpClient, RequestsHttpClient
from resource_manager.http.response import HttpResponse
from resource_manager.http.rest import RestResource

__all__ = [
    "HttpClient",
    "HttpResponse",
    "RequestsHttpClient",
    "RestResource",
]
