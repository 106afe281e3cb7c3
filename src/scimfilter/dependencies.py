from typing import Optional, Annotated
from fastapi import Depends, Query
from pydantic import ValidationError
from scimfilter.exceptions import InvalidValue
from scimfilter.schemas import SearchRequest


def get_search_params(
    filter: Annotated[Optional[str], Query()] = None,
    attributes: Annotated[Optional[str], Query()] = None,
    excluded_attributes: Annotated[Optional[str], Query(alias="excludedAttributes")] = None,
    sort_by: Annotated[Optional[str], Query(alias="sortBy")] = None,
    sort_order: Annotated[Optional[str], Query(alias="sortOrder")] = None,
    start_index: Annotated[int, Query(alias="startIndex")] = 1,
    count: Annotated[Optional[int], Query()] = None,
) -> SearchRequest:
    params = {
        "filter": filter,
        "attributes": attributes,
        "excludedAttributes": excluded_attributes,
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "startIndex": start_index,
    }
    if count is not None:
        params["count"] = count
    try:
        return SearchRequest(**params)
    except ValidationError as e:
        raise InvalidValue(f"Invalid search parameters: {e.errors()[0]['msg']}")


# Type alias for dependency injection
SearchParams = Annotated[SearchRequest, Depends(get_search_params)]
