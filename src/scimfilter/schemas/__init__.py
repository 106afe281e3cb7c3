from .base import (
    ListResponse,
    ResourceType,
    SCIMSchemaUri,
    CORE_SCHEMA_URIS,
)
from .error import ErrorResponse
from .search import SearchRequest

__all__ = [
    "ListResponse",
    "ResourceType",
    "SCIMSchemaUri",
    "CORE_SCHEMA_URIS",
    "ErrorResponse",
    "SearchRequest",
]
