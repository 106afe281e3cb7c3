from .logging import logger, get_logger, setup_logging, console
from .attribute_path import resolve_attr_path, find_key
from .attribute_projection import (
    AttributeProjection,
    apply_attribute_projection,
    apply_attribute_projection_to_list,
)

__all__ = [
    "logger",
    "get_logger",
    "setup_logging",
    "console",
    "resolve_attr_path",
    "find_key",
    "AttributeProjection",
    "apply_attribute_projection",
    "apply_attribute_projection_to_list",
]
