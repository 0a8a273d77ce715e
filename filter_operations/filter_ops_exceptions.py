"""
Filter Operations Exceptions

Exceptions raised while building or compiling filter expressions. All of them
are raised before any statement reaches the ClickHouse client.
"""

from clickhouse_ops_exceptions import ClickHouseOpsError, InvalidArgumentError


class FilterExpressionError(ClickHouseOpsError):
    """Base exception for all filter expression errors"""
    pass


class InvalidFilterError(FilterExpressionError, InvalidArgumentError):
    """
    Raised when a filter expression is malformed or missing.

    Examples: an empty AND/OR, NOT with more than one operand, a comparison
    whose left side is not a Key, IN/NOT IN against a scalar, or a delete by
    filter without a filter.
    """
    pass


class UnsupportedOperatorError(FilterExpressionError):
    """Raised when a node carries an operator outside the supported set"""

    def __init__(self, operator):
        self.operator = operator
        super().__init__(f"Not supported expression type: {operator}")
