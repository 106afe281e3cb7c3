"""SCIM 2.0 filter engine, database push-down bridge and attribute projection."""

from .exceptions import InvalidFilter, InvalidFilterSyntax, InvalidPath, SCIMException
from .filters import (
    DbFilterResult,
    build_filter,
    build_group_filter,
    build_user_filter,
    evaluate_filter,
    parse_scim_filter,
)
from .utils.attribute_path import resolve_attr_path
from .utils.attribute_projection import apply_attribute_projection, apply_attribute_projection_to_list

__all__ = [
    "SCIMException",
    "InvalidFilter",
    "InvalidFilterSyntax",
    "InvalidPath",
    "DbFilterResult",
    "build_filter",
    "build_group_filter",
    "build_user_filter",
    "evaluate_filter",
    "parse_scim_filter",
    "resolve_attr_path",
    "apply_attribute_projection",
    "apply_attribute_projection_to_list",
]
