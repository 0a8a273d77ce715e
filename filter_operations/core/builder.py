"""
Filter Expression Builder

Fluent helpers for building filter expression trees without spelling out
every node. Each method returns a new immutable node.

Typical usage:

    b = FilterExpressionBuilder()
    expression = b.and_(
        b.eq("genre", "drama"),
        b.group(b.or_(b.gte("year", 2020), b.in_("country", "UK", "NL"))),
    )
"""

from typing import Any

from filter_operations.models.expressions import (
    BooleanOp,
    BooleanOperator,
    Comparison,
    ComparisonOperator,
    FilterExpression,
    Group,
    Key,
    Value,
)


class FilterExpressionBuilder:
    """Builds filter expressions from plain keys and values."""

    def eq(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.EQ, key, value)

    def ne(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.NE, key, value)

    def lt(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.LT, key, value)

    def lte(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.LTE, key, value)

    def gt(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.GT, key, value)

    def gte(self, key: str, value: Any) -> Comparison:
        return self._compare(ComparisonOperator.GTE, key, value)

    def in_(self, key: str, *values: Any) -> Comparison:
        """Membership test; a single list argument is accepted as well."""
        return self._compare(ComparisonOperator.IN, key, self._as_list(values))

    def nin(self, key: str, *values: Any) -> Comparison:
        """Negated membership test; a single list argument is accepted as well."""
        return self._compare(ComparisonOperator.NIN, key, self._as_list(values))

    def and_(self, *operands: FilterExpression) -> BooleanOp:
        return BooleanOp(BooleanOperator.AND, operands)

    def or_(self, *operands: FilterExpression) -> BooleanOp:
        return BooleanOp(BooleanOperator.OR, operands)

    def not_(self, operand: FilterExpression) -> BooleanOp:
        return BooleanOp(BooleanOperator.NOT, (operand,))

    def group(self, inner: FilterExpression) -> Group:
        return Group(inner)

    @staticmethod
    def _compare(operator: ComparisonOperator, key: str, value: Any) -> Comparison:
        return Comparison(operator, Key(key), Value(value))

    @staticmethod
    def _as_list(values: tuple) -> list:
        if len(values) == 1 and isinstance(values[0], (list, tuple)):
            return list(values[0])
        return list(values)
