"""
SCIM filter evaluation against in-memory resources

String comparisons are case-insensitive (caseExact=false, RFC 7643 Section 2.2).
Multi-valued attributes match when any element matches (RFC 7644 Section 3.4.2.2).
"""

from typing import Any, Dict

from scimfilter.filters.ast import (
    CompValue, CompareNode, FilterNode, LogicalNode, NotNode, ValuePathNode,
)
from scimfilter.utils.attribute_path import resolve_attr_path
from scimfilter.utils.logging import get_logger


logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _fold(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _equals(actual: Any, expected: Any) -> bool:
    # bool is an int subclass; true never equals 1
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    if type(actual) is not type(expected):
        return False
    return _fold(actual) == _fold(expected)


def _is_present(actual: Any) -> bool:
    if actual is None:
        return False
    if isinstance(actual, (str, list)) and len(actual) == 0:
        return False
    return True


def _order(op: str, actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str):
        left, right = actual.lower(), expected.lower()
    elif _is_number(actual) and _is_number(expected):
        left, right = actual, expected
    else:
        return False

    if op == 'gt':
        return left > right
    if op == 'ge':
        return left >= right
    if op == 'lt':
        return left < right
    return left <= right


def compare_values(op: str, actual: Any, expected: CompValue) -> bool:
    """Apply a single comparison operator to a resolved (scalar) value."""
    if op == 'pr':
        return _is_present(actual)

    if op == 'eq':
        if actual is None:
            return expected is None
        return _equals(actual, expected)

    if op == 'ne':
        if actual is None:
            return expected is not None
        return not _equals(actual, expected)

    if op in ('co', 'sw', 'ew'):
        if not isinstance(actual, str) or not isinstance(expected, str):
            return False
        haystack, needle = actual.lower(), expected.lower()
        if op == 'co':
            return needle in haystack
        if op == 'sw':
            return haystack.startswith(needle)
        return haystack.endswith(needle)

    if op in ('gt', 'ge', 'lt', 'le'):
        return _order(op, actual, expected)

    return False


def evaluate_filter(node: FilterNode, resource: Dict[str, Any]) -> bool:
    """
    Evaluate a parsed filter AST against a resource.

    Args:
        node: Root node returned by parse_scim_filter()
        resource: The SCIM resource dictionary to test

    Returns:
        True if the resource matches the filter
    """
    node_type = getattr(node, 'type', None)

    if node_type == 'compare' and isinstance(node, CompareNode):
        actual = resolve_attr_path(resource, node.attr_path)
        if isinstance(actual, list):
            return any(compare_values(node.op, item, node.value) for item in actual)
        return compare_values(node.op, actual, node.value)

    if node_type == 'logical' and isinstance(node, LogicalNode):
        left = evaluate_filter(node.left, resource)
        right = evaluate_filter(node.right, resource)
        if node.op == 'and':
            return left and right
        return left or right

    if node_type == 'not' and isinstance(node, NotNode):
        return not evaluate_filter(node.filter, resource)

    if node_type == 'valuePath' and isinstance(node, ValuePathNode):
        values = resolve_attr_path(resource, node.attr_path)
        if not isinstance(values, list):
            return False
        return any(
            evaluate_filter(node.filter, item)
            for item in values
            if isinstance(item, dict)
        )

    logger.warning(f"Unrecognized filter node {node!r}; treating as no match")
    return False
