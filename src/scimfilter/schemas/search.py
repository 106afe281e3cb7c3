from typing import List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator
from scimfilter.config import settings
from .base import SCIMSchemaUri


class SearchRequest(BaseModel):
    """
    List/query parameters, from either GET query parameters or a
    POST /.search body (RFC 7644 Section 3.4.3).
    """
    model_config = ConfigDict(populate_by_name=True)

    schemas: List[str] = [SCIMSchemaUri.SEARCH_REQUEST.value]
    attributes: Optional[Union[str, List[str]]] = None
    excluded_attributes: Optional[Union[str, List[str]]] = Field(None, alias="excludedAttributes")
    filter: Optional[str] = None
    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: str = Field("ascending", alias="sortOrder")
    start_index: int = Field(1, alias="startIndex")
    count: int = settings.default_page_size

    @field_validator("sort_order", mode="before")
    def validate_sort_order(cls, v: Optional[str]) -> str:
        if v is None:
            return "ascending"
        allowed = ["ascending", "descending"]
        if v not in allowed:
            raise ValueError(f"sortOrder must be one of {allowed}")
        return v

    @field_validator("start_index")
    def validate_start_index(cls, v: int) -> int:
        # RFC 7644 Section 3.4.2.4: values less than 1 are interpreted as 1
        return max(v, 1)

    @field_validator("count")
    def validate_count(cls, v: int) -> int:
        # Negative counts are interpreted as 0
        return max(v, 0)

    @property
    def offset(self) -> int:
        return self.start_index - 1  # SCIM uses 1-based indexing

    @property
    def limit(self) -> int:
        return min(self.count, settings.max_page_size)
