"""
Bridge between parsed SCIM filters and the storage layer.

A filter that is a single ``attr eq <scalar>`` comparison on a mapped column is
pushed down as an equality predicate. Anything else is evaluated in memory
after fetching every row of the resource type.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from scimfilter.filters.ast import CompareNode, FilterNode
from scimfilter.filters.evaluator import evaluate_filter
from scimfilter.filters.parser import parse_scim_filter
from scimfilter.schemas.base import ResourceType
from scimfilter.utils.logging import get_logger


logger = get_logger(__name__)


# Lowercased SCIM attribute -> ScimResource column
USER_COLUMN_MAP: Dict[str, str] = {
    'username': 'user_name',
    'externalid': 'external_id',
    'id': 'scim_id',
}

GROUP_COLUMN_MAP: Dict[str, str] = {
    'externalid': 'external_id',
    'id': 'scim_id',
    'displayname': 'display_name',
}

COLUMN_MAPS: Dict[ResourceType, Dict[str, str]] = {
    ResourceType.USER: USER_COLUMN_MAP,
    ResourceType.GROUP: GROUP_COLUMN_MAP,
}


@dataclass
class DbFilterResult:
    """
    Outcome of planning a filter against the storage layer.

    ``fetch_all`` is False only when ``db_predicate`` fully determines the
    match set. When it is True, ``db_predicate`` is empty and
    ``in_memory_filter`` must be applied to every fetched resource.
    """
    db_predicate: Dict[str, Any] = field(default_factory=dict)
    fetch_all: bool = False
    in_memory_filter: Optional[Callable[[Dict[str, Any]], bool]] = None


def try_push_down(ast: FilterNode, column_map: Mapping[str, str]) -> Optional[Dict[str, Any]]:
    """Return an equality predicate for ``ast``, or None if it cannot be pushed down."""
    if not isinstance(ast, CompareNode) or ast.op != 'eq':
        return None
    if not isinstance(ast.value, (str, int, float, bool)):
        return None

    column = column_map.get(ast.attr_path.lower())
    if column is None:
        return None
    return {column: ast.value}


def build_filter(filter_string: Optional[str], column_map: Mapping[str, str]) -> DbFilterResult:
    """
    Plan how a SCIM filter is applied for one resource type.

    Args:
        filter_string: Raw ``filter`` parameter, may be None or empty
        column_map: Lowercased SCIM attribute name -> storage column

    Returns:
        DbFilterResult with either a pushed-down predicate or an in-memory filter

    Raises:
        InvalidFilterSyntax: If the filter cannot be parsed
    """
    if not filter_string:
        return DbFilterResult()

    ast = parse_scim_filter(filter_string)

    predicate = try_push_down(ast, column_map)
    if predicate is not None:
        logger.debug(f"Filter '{filter_string}' pushed down as {predicate}")
        return DbFilterResult(db_predicate=predicate, fetch_all=False)

    logger.debug(f"Filter '{filter_string}' evaluated in memory")

    def in_memory_filter(resource: Dict[str, Any]) -> bool:
        return evaluate_filter(ast, resource)

    return DbFilterResult(db_predicate={}, fetch_all=True, in_memory_filter=in_memory_filter)


def build_user_filter(filter_string: Optional[str] = None) -> DbFilterResult:
    return build_filter(filter_string, USER_COLUMN_MAP)


def build_group_filter(filter_string: Optional[str] = None) -> DbFilterResult:
    return build_filter(filter_string, GROUP_COLUMN_MAP)
