"""
Filter Operations Module

Portable metadata filters for ClickHouse vector searches and deletes:
- Immutable filter expression tree (keys, values, comparisons, connectives, groups)
- Fluent builder for common expressions
- Converter producing native ClickHouse predicates, with IS (NOT) NULL
  rewrites for null comparisons

Typical usage from external projects:

    from filter_operations import FilterExpressionBuilder, compile_filter

    b = FilterExpressionBuilder()
    predicate = compile_filter(b.eq("author", None), "metadata")
    # "metadata.author IS NULL"
"""

from .models.expressions import (
    Key,
    Value,
    Comparison,
    BooleanOp,
    Group,
    ComparisonOperator,
    BooleanOperator,
    FilterExpression,
)
from .core.builder import FilterExpressionBuilder
from .core.converter import FilterExpressionConverter, compile_filter, format_literal
from .filter_ops_exceptions import (
    FilterExpressionError,
    InvalidFilterError,
    UnsupportedOperatorError,
)

__all__ = [
    # Expression tree
    'Key',
    'Value',
    'Comparison',
    'BooleanOp',
    'Group',
    'ComparisonOperator',
    'BooleanOperator',
    'FilterExpression',
    # Builder and converter
    'FilterExpressionBuilder',
    'FilterExpressionConverter',
    'compile_filter',
    'format_literal',
    # Exceptions
    'FilterExpressionError',
    'InvalidFilterError',
    'UnsupportedOperatorError',
]
