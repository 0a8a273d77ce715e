"""
Filter Models

Contains the frozen dataclasses making up a filter expression tree.
"""

from .expressions import (
    Key,
    Value,
    Comparison,
    BooleanOp,
    Group,
    ComparisonOperator,
    BooleanOperator,
    FilterExpression,
)

__all__ = [
    'Key',
    'Value',
    'Comparison',
    'BooleanOp',
    'Group',
    'ComparisonOperator',
    'BooleanOperator',
    'FilterExpression',
]
