from .ast import CompareNode, LogicalNode, NotNode, ValuePathNode, FilterNode
from .tokenizer import Token, TokenType, tokenize
from .parser import SCIMFilterParser, parse, parse_scim_filter
from .evaluator import evaluate_filter
from .pushdown import (
    DbFilterResult,
    USER_COLUMN_MAP,
    GROUP_COLUMN_MAP,
    COLUMN_MAPS,
    build_filter,
    build_user_filter,
    build_group_filter,
)

__all__ = [
    "CompareNode",
    "LogicalNode",
    "NotNode",
    "ValuePathNode",
    "FilterNode",
    "Token",
    "TokenType",
    "tokenize",
    "SCIMFilterParser",
    "parse",
    "parse_scim_filter",
    "evaluate_filter",
    "DbFilterResult",
    "USER_COLUMN_MAP",
    "GROUP_COLUMN_MAP",
    "COLUMN_MAPS",
    "build_filter",
    "build_user_filter",
    "build_group_filter",
]
