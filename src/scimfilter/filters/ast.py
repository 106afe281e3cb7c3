"""
SCIM filter AST (RFC 7644 Section 3.4.2.2)

Four immutable node kinds, discriminated by their ``type`` field:

    CompareNode    attrPath op compValue | attrPath pr
    LogicalNode    left and|or right
    NotNode        not (filter)
    ValuePathNode  attrPath[filter]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union


CompareOp = Literal['eq', 'ne', 'co', 'sw', 'ew', 'gt', 'ge', 'lt', 'le', 'pr']
LogicalOp = Literal['and', 'or']
CompValue = Optional[Union[str, int, float, bool]]

COMPARE_OPS = frozenset({'eq', 'ne', 'co', 'sw', 'ew', 'gt', 'ge', 'lt', 'le'})


@dataclass(frozen=True)
class CompareNode:
    """Comparison expression; ``value`` is unused when ``op`` is ``pr``"""
    attr_path: str
    op: CompareOp
    value: CompValue = None
    type: Literal['compare'] = field(default='compare', init=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {'type': self.type, 'attrPath': self.attr_path, 'op': self.op}
        if self.op != 'pr':
            data['value'] = self.value
        return data


@dataclass(frozen=True)
class LogicalNode:
    op: LogicalOp
    left: 'FilterNode'
    right: 'FilterNode'
    type: Literal['logical'] = field(default='logical', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'op': self.op, 'left': self.left.to_dict(), 'right': self.right.to_dict()}


@dataclass(frozen=True)
class NotNode:
    filter: 'FilterNode'
    type: Literal['not'] = field(default='not', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'filter': self.filter.to_dict()}


@dataclass(frozen=True)
class ValuePathNode:
    """``attrPath[filter]`` - the filter is applied to each element of a multi-valued attribute"""
    attr_path: str
    filter: 'FilterNode'
    type: Literal['valuePath'] = field(default='valuePath', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'attrPath': self.attr_path, 'filter': self.filter.to_dict()}


FilterNode = Union[CompareNode, LogicalNode, NotNode, ValuePathNode]
