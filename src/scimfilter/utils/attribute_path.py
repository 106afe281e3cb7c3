"""
SCIM attribute path resolution (RFC 7643 Section 2.1, RFC 7644 Section 3.10)

Resolves simple, dotted and URN-qualified attribute paths against a resource
dictionary. Every segment is matched case-insensitively against the keys of
the object it is looked up in.
"""

import re
from typing import Any, Dict, Optional

from scimfilter.schemas.base import CORE_SCHEMA_URIS


# urn:<schema>:<attribute>[.<subAttribute>] - the URN prefix ends at the last colon
URN_PATH_PATTERN = re.compile(r'^(urn:[a-zA-Z0-9:._-]+):([a-zA-Z0-9_.$-]+)$', re.IGNORECASE)


def find_key(obj: Dict[str, Any], name: str) -> Optional[str]:
    """Return the actual key of ``obj`` matching ``name`` case-insensitively, if any."""
    lower = name.lower()
    for key in obj:
        if key.lower() == lower:
            return key
    return None


def split_urn_path(path: str) -> Optional[tuple]:
    """
    Split a URN-qualified path into its schema URN and attribute suffix.

    Examples:
        "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User:department"
            -> ("urn:ietf:params:scim:schemas:extension:enterprise:2.0:User", "department")
        "userName" -> None
    """
    match = URN_PATH_PATTERN.match(path)
    if not match:
        return None
    return match.group(1), match.group(2)


def _resolve_dotted(obj: Any, path: str) -> Any:
    current = obj
    for part in path.split('.'):
        # Arrays are not traversed implicitly; only valuePath filters iterate them
        if not isinstance(current, dict):
            return None
        key = find_key(current, part)
        if key is None:
            return None
        current = current[key]
    return current


def resolve_attr_path(resource: Dict[str, Any], path: str) -> Any:
    """
    Resolve an attribute path on a SCIM resource.

    Supports:
        - Simple paths: "userName"
        - Dotted paths: "name.givenName"
        - URN paths: "urn:...:User:department" -> resource["urn:...:User"]["department"]

    Args:
        resource: The resource dictionary
        path: Attribute path

    Returns:
        The resolved value, or None when any segment is missing or a
        non-terminal segment is not an object
    """
    if not isinstance(resource, dict):
        return None

    urn_parts = split_urn_path(path)
    if urn_parts:
        urn, sub_path = urn_parts
        urn_key = find_key(resource, urn)
        if urn_key is not None:
            return _resolve_dotted(resource[urn_key], sub_path)
        if urn.lower() in CORE_SCHEMA_URIS:
            return _resolve_dotted(resource, sub_path)
        return None

    return _resolve_dotted(resource, path)
