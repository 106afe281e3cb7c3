"""
Resource repositories consumed by the list pipeline.

A repository returns the resources of one endpoint and resource type that
satisfy an equality predicate over the push-down columns. An empty predicate
returns every resource of that type for the endpoint.
"""
from typing import Any, Dict, List, Protocol

from scimfilter.filters.evaluator import compare_values
from scimfilter.models import ScimResource
from scimfilter.schemas.base import ResourceType
from scimfilter.utils.attribute_path import resolve_attr_path


# ScimResource column -> attribute path it is copied from
COLUMN_SOURCES: Dict[str, str] = {
    "scim_id": "id",
    "external_id": "externalId",
    "user_name": "userName",
    "display_name": "displayName",
}


class ResourceRepository(Protocol):
    async def find(
        self,
        endpoint_id: str,
        resource_type: ResourceType,
        predicate: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        ...


class InMemoryResourceRepository:
    """Dictionary-backed repository, ordered by insertion."""

    def __init__(self):
        self._resources: Dict[tuple, List[Dict[str, Any]]] = {}

    async def add(self, endpoint_id: str, resource_type: ResourceType, resource: Dict[str, Any]) -> Dict[str, Any]:
        self._resources.setdefault((endpoint_id, resource_type), []).append(resource)
        return resource

    async def find(
        self,
        endpoint_id: str,
        resource_type: ResourceType,
        predicate: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        rows = self._resources.get((endpoint_id, resource_type), [])
        return [
            resource for resource in rows
            if all(
                compare_values("eq", resolve_attr_path(resource, COLUMN_SOURCES[column]), value)
                for column, value in predicate.items()
            )
        ]


class TortoiseResourceRepository:
    """Repository over the ScimResource table."""

    async def add(self, endpoint_id: str, resource_type: ResourceType, resource: Dict[str, Any]) -> ScimResource:
        columns: Dict[str, Any] = {}
        for column, path in COLUMN_SOURCES.items():
            value = resolve_attr_path(resource, path)
            columns[column] = value
            # Folded here, not in SQL: SQLite LOWER() only folds ASCII
            columns[f"{column}_lower"] = value.lower() if isinstance(value, str) else None
        return await ScimResource.create(
            endpoint_id=endpoint_id,
            resource_type=resource_type.value,
            payload=resource,
            **columns,
        )

    async def find(
        self,
        endpoint_id: str,
        resource_type: ResourceType,
        predicate: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        query = ScimResource.filter(endpoint_id=endpoint_id, resource_type=resource_type.value)

        for column, value in predicate.items():
            # Push-down columns are text; a typed literal never equals a string attribute
            if not isinstance(value, str):
                return []
            # SCIM string attributes are case-insensitive (caseExact=false)
            query = query.filter(**{f"{column}_lower": value.lower()})

        rows = await query.order_by("created")
        return [row.payload for row in rows]
