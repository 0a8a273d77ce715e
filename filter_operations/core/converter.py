"""
Filter Expression Converter

Compiles a portable filter expression tree into a ClickHouse predicate over
the JSON metadata column. The conversion is a single recursive pass that
writes text directly; it never adds parentheses beyond explicit Group nodes,
so operator precedence is entirely up to the caller.

Typical usage:

    from filter_operations import FilterExpressionBuilder, FilterExpressionConverter

    b = FilterExpressionBuilder()
    converter = FilterExpressionConverter("metadata")
    converter.convert(b.or_(b.eq("meta1", "meta1"), b.eq("meta2", "meta2")))
    # "metadata.meta1 == 'meta1' OR metadata.meta2 == 'meta2'"

Known limitation: IN / NOT IN against values stored in the JSON column do not
match ClickHouse semantics for every stored type (the engine may require an
explicit cast such as ``key::String``). The converter emits the plain form.
"""

from typing import Any, List

from filter_operations.filter_ops_exceptions import InvalidFilterError, UnsupportedOperatorError
from filter_operations.models.expressions import (
    BooleanOp,
    BooleanOperator,
    Comparison,
    ComparisonOperator,
    Group,
    Key,
    Value,
)


COMPARISON_SYMBOLS = {
    ComparisonOperator.EQ: " == ",
    ComparisonOperator.NE: " != ",
    ComparisonOperator.LT: " < ",
    ComparisonOperator.LTE: " <= ",
    ComparisonOperator.GT: " > ",
    ComparisonOperator.GTE: " >= ",
    ComparisonOperator.IN: " IN ",
    ComparisonOperator.NIN: " NOT IN ",
}

CONNECTIVE_SYMBOLS = {
    BooleanOperator.AND: " AND ",
    BooleanOperator.OR: " OR ",
}

NULL_TESTS = {
    ComparisonOperator.EQ: " IS NULL",
    ComparisonOperator.NE: " IS NOT NULL",
}


class FilterExpressionConverter:
    """
    Converts filter expressions into ClickHouse predicates.

    The converter holds only the metadata column name and is safe to share
    between threads.
    """

    def __init__(self, metadata_column_name: str):
        """
        Args:
            metadata_column_name: JSON column that keys are resolved against
        """
        if not metadata_column_name:
            raise InvalidFilterError("Metadata column name must not be empty")
        self.metadata_column_name = metadata_column_name

    def convert(self, expression: Any) -> str:
        """
        Convert a filter expression into a native predicate string.

        Args:
            expression: Root node (Comparison, BooleanOp, Group, Key or Value)

        Returns:
            Predicate text suitable for a WHERE clause

        Raises:
            InvalidFilterError: If the expression is missing or malformed
            UnsupportedOperatorError: If a node carries an unknown operator
        """
        if expression is None:
            raise InvalidFilterError("Filter expression must not be None")
        parts: List[str] = []
        self._convert_operand(expression, parts)
        return "".join(parts)

    def _convert_operand(self, operand: Any, parts: List[str]) -> None:
        if isinstance(operand, Comparison):
            self._do_comparison(operand, parts)
        elif isinstance(operand, BooleanOp):
            self._do_boolean(operand, parts)
        elif isinstance(operand, Group):
            parts.append("(")
            self._convert_operand(operand.inner, parts)
            parts.append(")")
        elif isinstance(operand, Key):
            self._do_key(operand, parts)
        elif isinstance(operand, Value):
            self._do_value(operand, parts)
        else:
            raise InvalidFilterError(f"Unsupported filter node: {type(operand).__name__}")

    def _do_comparison(self, comparison: Comparison, parts: List[str]) -> None:
        operator = comparison.operator
        if operator not in COMPARISON_SYMBOLS:
            raise UnsupportedOperatorError(operator)

        self._convert_operand(comparison.left, parts)
        # "== NULL" never matches in ClickHouse, so null checks become IS (NOT) NULL
        if operator in NULL_TESTS and comparison.right.value is None:
            parts.append(NULL_TESTS[operator])
            return

        parts.append(COMPARISON_SYMBOLS[operator])
        self._convert_operand(comparison.right, parts)

    def _do_boolean(self, boolean_op: BooleanOp, parts: List[str]) -> None:
        operator = boolean_op.operator
        if operator == BooleanOperator.NOT:
            parts.append("NOT ")
            self._convert_operand(boolean_op.operands[0], parts)
            return
        if operator not in CONNECTIVE_SYMBOLS:
            raise UnsupportedOperatorError(operator)

        symbol = CONNECTIVE_SYMBOLS[operator]
        for index, operand in enumerate(boolean_op.operands):
            if index:
                parts.append(symbol)
            self._convert_operand(operand, parts)

    def _do_key(self, key: Key, parts: List[str]) -> None:
        parts.append(f"{self.metadata_column_name}.{key.name}")

    def _do_value(self, value: Value, parts: List[str]) -> None:
        if value.is_list:
            parts.append("(")
            parts.append(",".join(format_literal(item) for item in value.value))
            parts.append(")")
        else:
            parts.append(format_literal(value.value))


def format_literal(value: Any) -> str:
    """
    Render a scalar as a ClickHouse literal.

    Strings are single-quoted without escaping, booleans become true/false,
    None becomes NULL and numbers keep their Python text form.
    """
    if value is None:
        return "NULL"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_filter(expression: Any, metadata_column_name: str) -> str:
    """Compile ``expression`` against ``metadata_column_name`` in one call."""
    return FilterExpressionConverter(metadata_column_name).convert(expression)
