from resource_manager.core.capabilities import LocalMutators, RemoteCrud
from resource_manager.core.errors import HttpError, MissingCapabilityError, ResourceManagerError
from resource_manager.core.manager import QueryActions, ResourceManager
from resource_manager.core.models import (
    ExtractionResult,
    FetchMode,
    FetchSnapshot,
    FetchStatus,
    MutationState,
    PageCursor,
)
from resource_manager.fetch.extractors import DataExtractor, KeyedExtractor, from_mapping
from resource_manager.fetch.state import FetchState
from resource_manager.mutation.coordinator import MutationCoordinator

__all__ = [
    "DataExtractor",
    "ExtractionResult",
    "FetchMode",
    "FetchSnapshot",
    "FetchState",
    "FetchStatus",
    "HttpError",
    "KeyedExtractor",
    "LocalMutators",
    "MissingCapabilityError",
    "MutationCoordinator",
    "MutationState",
    "PageCursor",
    "QueryActions",
    "RemoteCrud",
    "ResourceManager",
    "ResourceManagerError",
    "from_mapping",
]
