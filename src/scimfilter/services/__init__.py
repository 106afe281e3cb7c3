from .repository import ResourceRepository, InMemoryResourceRepository, TortoiseResourceRepository
from .resource_query import ResourceQueryService, sort_resources

__all__ = [
    "ResourceRepository",
    "InMemoryResourceRepository",
    "TortoiseResourceRepository",
    "ResourceQueryService",
    "sort_resources",
]
