from typing import Any, Dict, List, Optional

from scimfilter.filters.pushdown import COLUMN_MAPS, build_filter
from scimfilter.schemas import ListResponse, ResourceType, SearchRequest
from scimfilter.services.repository import ResourceRepository
from scimfilter.utils import logger
from scimfilter.utils.attribute_path import resolve_attr_path
from scimfilter.utils.attribute_projection import (
    AttributeList,
    apply_attribute_projection,
    apply_attribute_projection_to_list,
)


def _sort_key(sort_by: str):
    def key(resource: Dict[str, Any]):
        value = resolve_attr_path(resource, sort_by)
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None or isinstance(value, (dict, list)):
            return (2, "")
        if isinstance(value, str):
            return (1, value.lower())
        return (0, value)
    return key


def sort_resources(resources: List[Dict[str, Any]], sort_by: str, sort_order: str = "ascending") -> List[Dict[str, Any]]:
    """
    Sort resources by an attribute path (RFC 7644 Section 3.4.2.3).

    Strings sort case-insensitively; resources without a value sort last in
    either order.
    """
    key = _sort_key(sort_by)
    present = [r for r in resources if key(r)[0] != 2]
    missing = [r for r in resources if key(r)[0] == 2]
    ordered = sorted(present, key=key, reverse=sort_order == "descending")
    return ordered + missing


class ResourceQueryService:
    def __init__(self, repository: ResourceRepository):
        self.repository = repository

    async def list_resources(
        self,
        endpoint_id: str,
        resource_type: ResourceType,
        request: SearchRequest,
    ) -> ListResponse:
        logger.info(
            f"List {resource_type.value} resources for endpoint {endpoint_id} "
            f"(filter={request.filter!r}, startIndex={request.start_index}, count={request.count})"
        )

        filter_result = build_filter(request.filter, COLUMN_MAPS[resource_type])
        resources = await self.repository.find(endpoint_id, resource_type, filter_result.db_predicate)

        if filter_result.fetch_all:
            fetched = len(resources)
            resources = [r for r in resources if filter_result.in_memory_filter(r)]
            logger.debug(f"In-memory filter kept {len(resources)} of {fetched} {resource_type.value} resources")

        if request.sort_by:
            resources = sort_resources(resources, request.sort_by, request.sort_order)

        total_results = len(resources)
        page = resources[request.offset:request.offset + request.limit]
        page = apply_attribute_projection_to_list(page, request.attributes, request.excluded_attributes)

        return ListResponse(
            total_results=total_results,
            Resources=page,
            start_index=request.start_index,
            items_per_page=len(page),
        )

    async def get_resource(
        self,
        endpoint_id: str,
        resource_type: ResourceType,
        scim_id: str,
        attributes: AttributeList = None,
        excluded_attributes: AttributeList = None,
    ) -> Optional[Dict[str, Any]]:
        escaped = scim_id.replace("\\", "\\\\").replace('"', '\\"')
        filter_result = build_filter(f'id eq "{escaped}"', COLUMN_MAPS[resource_type])
        resources = await self.repository.find(endpoint_id, resource_type, filter_result.db_predicate)
        if not resources:
            logger.debug(f"{resource_type.value} {scim_id} not found for endpoint {endpoint_id}")
            return None
        return apply_attribute_projection(resources[0], attributes, excluded_attributes)
