"""
Core Filter Operations

Builder and converter for filter expressions.
"""

from .builder import FilterExpressionBuilder
from .converter import FilterExpressionConverter, compile_filter, format_literal

__all__ = [
    'FilterExpressionBuilder',
    'FilterExpressionConverter',
    'compile_filter',
    'format_literal',
]
