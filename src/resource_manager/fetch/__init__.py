from resource_manager.fetch.extractors import DataExtractor, KeyedExtractor, from_mapping
from resource_manager.fetch.state import FetchState

__all__ = [
    "DataExtractor",
    "FetchState",
    "KeyedExtractor",
    "from_mapping",
]
