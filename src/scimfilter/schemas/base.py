from typing import Any, Dict, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class SCIMSchemaUri(str, Enum):
    USER = "urn:ietf:params:scim:schemas:core:2.0:User"
    GROUP = "urn:ietf:params:scim:schemas:core:2.0:Group"
    ENTERPRISE_USER = "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User"
    LIST_RESPONSE = "urn:ietf:params:scim:api:messages:2.0:ListResponse"
    SEARCH_REQUEST = "urn:ietf:params:scim:api:messages:2.0:SearchRequest"
    ERROR = "urn:ietf:params:scim:api:messages:2.0:Error"


# Core schemas whose attributes may also be addressed with a fully qualified URN
CORE_SCHEMA_URIS = frozenset({SCIMSchemaUri.USER.value.lower(), SCIMSchemaUri.GROUP.value.lower()})


class ResourceType(str, Enum):
    USER = "User"
    GROUP = "Group"


class ListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schemas: List[str] = [SCIMSchemaUri.LIST_RESPONSE.value]
    total_results: int = Field(..., alias="totalResults")
    Resources: List[Dict[str, Any]]
    start_index: int = Field(1, alias="startIndex")
    items_per_page: int = Field(..., alias="itemsPerPage")
