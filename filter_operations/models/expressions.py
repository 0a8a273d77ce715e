"""
Filter Expression Model

Defines the portable, engine-agnostic filter tree used to restrict searches
and deletes by document metadata. Nodes are frozen dataclasses so a tree can
be shared freely between threads and reused across calls.

Typical usage:

    from filter_operations import Comparison, ComparisonOperator, Key, Value

    expression = Comparison(ComparisonOperator.EQ, Key("author"), Value("john"))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union

from filter_operations.filter_ops_exceptions import InvalidFilterError

# Scalars accepted as filter literals. bool is listed for readability; it is
# a subclass of int.
SCALAR_TYPES = (str, bool, int, float)


class ComparisonOperator(str, Enum):
    """Operators comparing a metadata key with a literal value"""
    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    LTE = "LTE"
    GT = "GT"
    GTE = "GTE"
    IN = "IN"
    NIN = "NIN"


class BooleanOperator(str, Enum):
    """Connectives combining filter expressions"""
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


LIST_OPERATORS = (ComparisonOperator.IN, ComparisonOperator.NIN)


def _operator_name(operator: Any) -> str:
    return getattr(operator, "value", str(operator))


@dataclass(frozen=True)
class Key:
    """Reference to a metadata field."""
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidFilterError("Filter key name must be a non-empty string")


@dataclass(frozen=True)
class Value:
    """
    Literal value of a comparison.

    Holds a scalar, ``None``, or an ordered sequence of scalars (stored as a
    tuple so the node stays hashable and immutable).
    """
    value: Any = None

    def __post_init__(self):
        value = self.value
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None and not isinstance(item, SCALAR_TYPES):
                    raise InvalidFilterError(
                        f"Unsupported list element type in filter value: {type(item).__name__}"
                    )
            object.__setattr__(self, "value", tuple(value))
        elif value is not None and not isinstance(value, SCALAR_TYPES):
            raise InvalidFilterError(f"Unsupported filter value type: {type(value).__name__}")

    @property
    def is_list(self) -> bool:
        return isinstance(self.value, tuple)


@dataclass(frozen=True)
class Comparison:
    """
    Comparison of a metadata key with a literal.

    ``left`` must be a Key and ``right`` a Value; IN and NIN require a
    non-empty list value.
    """
    operator: ComparisonOperator
    left: Key
    right: Value

    def __post_init__(self):
        if not isinstance(self.left, Key):
            raise InvalidFilterError(
                f"Left side of a comparison must be a Key, got {type(self.left).__name__}"
            )
        if not isinstance(self.right, Value):
            raise InvalidFilterError(
                f"Right side of a comparison must be a Value, got {type(self.right).__name__}"
            )
        if self.operator in LIST_OPERATORS and not self.right.is_list:
            raise InvalidFilterError(f"{_operator_name(self.operator)} requires a list value")
        if self.operator in LIST_OPERATORS and not self.right.value:
            raise InvalidFilterError(f"{_operator_name(self.operator)} requires at least one value")


@dataclass(frozen=True)
class BooleanOp:
    """
    Boolean connective over an ordered sequence of operands.

    AND and OR take one or more operands; NOT takes exactly one.
    """
    operator: BooleanOperator
    operands: Tuple["FilterExpression", ...]

    def __post_init__(self):
        operands = tuple(self.operands)
        object.__setattr__(self, "operands", operands)
        if not operands:
            raise InvalidFilterError(f"{_operator_name(self.operator)} requires at least one operand")
        if self.operator == BooleanOperator.NOT and len(operands) != 1:
            raise InvalidFilterError(f"NOT takes exactly one operand, got {len(operands)}")
        for operand in operands:
            if not isinstance(operand, EXPRESSION_TYPES):
                raise InvalidFilterError(
                    f"Unsupported operand of {_operator_name(self.operator)}: {type(operand).__name__}"
                )


@dataclass(frozen=True)
class Group:
    """Explicit parenthesization boundary."""
    inner: "FilterExpression"

    def __post_init__(self):
        if not isinstance(self.inner, EXPRESSION_TYPES):
            raise InvalidFilterError(f"Unsupported grouped expression: {type(self.inner).__name__}")


FilterExpression = Union[Comparison, BooleanOp, Group]

EXPRESSION_TYPES = (Comparison, BooleanOp, Group)
