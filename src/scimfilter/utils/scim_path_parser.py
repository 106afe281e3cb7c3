"""
SCIM Path Parser for RFC 7644 compliant PATCH path parsing.

Supports:
- Simple paths: "userName", "name.givenName"
- ValuePath with filters: "emails[type eq \"work\"].value"
- Extension paths: "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User:manager"
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from scimfilter.exceptions import InvalidPath
from scimfilter.filters.ast import FilterNode
from scimfilter.filters.evaluator import evaluate_filter
from scimfilter.filters.parser import parse_scim_filter
from scimfilter.utils.attribute_path import split_urn_path


@dataclass
class SCIMPath:
    """Represents a parsed SCIM path"""
    attribute: str  # Main attribute name (e.g., "emails", "name")
    filter: Optional[FilterNode] = None  # Parsed bracket filter, if present
    sub_attribute: Optional[str] = None  # Sub-attribute if present (e.g., "value", "givenName")
    schema_uri: Optional[str] = None  # Schema URI if fully qualified


def _closing_bracket(path: str, start: int) -> int:
    """Index of the ']' closing the '[' at ``start``, skipping quoted strings."""
    in_string = False
    i = start + 1
    while i < len(path):
        ch = path[i]
        if in_string:
            if ch == '\\':
                i += 1
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ']':
            return i
        i += 1
    raise InvalidPath(f"Invalid SCIM path: {path} (unclosed '[')")


def _split_sub_attribute(path: str, attribute_path: str):
    attribute, dot, sub_attribute = attribute_path.partition('.')
    if not attribute or (dot and (not sub_attribute or '.' in sub_attribute)):
        raise InvalidPath(f"Invalid SCIM path: {path}")
    return attribute, sub_attribute or None


def parse_scim_path(path: str) -> SCIMPath:
    """
    Parse a SCIM PATCH path according to RFC 7644 Section 3.5.2.

    Examples:
        "userName" -> SCIMPath(attribute="userName")
        "name.givenName" -> SCIMPath(attribute="name", sub_attribute="givenName")
        "emails[type eq \"work\"].value" -> SCIMPath(attribute="emails", filter=<AST>, sub_attribute="value")
        "urn:...:enterprise:2.0:User:manager" -> SCIMPath(schema_uri="urn:...:enterprise:2.0:User", attribute="manager")

    Raises:
        InvalidPath: If the path is empty or malformed
        InvalidFilterSyntax: If the bracket filter is malformed
    """
    if not path or not path.strip():
        raise InvalidPath("Path cannot be empty")
    path = path.strip()

    if '[' in path:
        start = path.index('[')
        end = _closing_bracket(path, start)
        attribute = path[:start]
        rest = path[end + 1:]
        if not attribute or '.' in attribute or (rest and not rest.startswith('.')):
            raise InvalidPath(f"Invalid SCIM path: {path}")
        sub_attribute = rest[1:] if rest else None
        if rest and (not sub_attribute or '.' in sub_attribute):
            raise InvalidPath(f"Invalid SCIM path: {path}")
        return SCIMPath(
            attribute=attribute,
            filter=parse_scim_filter(path[start + 1:end]),
            sub_attribute=sub_attribute,
        )

    urn_parts = split_urn_path(path)
    if urn_parts:
        schema_uri, attribute_path = urn_parts
        attribute, sub_attribute = _split_sub_attribute(path, attribute_path)
        return SCIMPath(attribute=attribute, sub_attribute=sub_attribute, schema_uri=schema_uri)

    attribute, sub_attribute = _split_sub_attribute(path, path)
    return SCIMPath(attribute=attribute, sub_attribute=sub_attribute)


def find_matching_items(items: List[Any], filter_node: FilterNode) -> List[Dict[str, Any]]:
    """
    Find the object elements of a multi-valued attribute that match a filter.

    Args:
        items: Elements of the multi-valued attribute
        filter_node: Parsed filter, typically SCIMPath.filter

    Returns:
        List of matching items, in their original order
    """
    return [
        item for item in items
        if isinstance(item, dict) and evaluate_filter(filter_node, item)
    ]
