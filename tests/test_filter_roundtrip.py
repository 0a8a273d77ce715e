"""
Property tests: compiled predicates keep the structure of the filter tree.

A compiled predicate is parsed back with ClickHouse precedence and evaluated
against random metadata; it must agree with evaluating the tree directly.
Nested connectives are always wrapped in Group nodes, since the converter
leaves precedence to the caller.
"""

from hypothesis import given, settings, strategies as st

from filter_operations import (
    BooleanOp,
    BooleanOperator,
    Comparison,
    ComparisonOperator,
    Group,
    Key,
    Value,
    compile_filter,
)
from tests.predicate_eval import compare, kleene_and, kleene_not, kleene_or, evaluate_predicate, metadata_lookup

KEYS = ["a", "b", "c", "genre", "year"]
SYMBOLS = {
    ComparisonOperator.EQ: "==",
    ComparisonOperator.NE: "!=",
    ComparisonOperator.LT: "<",
    ComparisonOperator.LTE: "<=",
    ComparisonOperator.GT: ">",
    ComparisonOperator.GTE: ">=",
    ComparisonOperator.IN: "IN",
    ComparisonOperator.NIN: "NOT IN",
}

scalars = st.one_of(
    st.integers(min_value=-5, max_value=5),
    st.sampled_from([-1.5, 0.5, 2.25]),
    st.text(alphabet="xyz", min_size=0, max_size=2),
    st.booleans(),
)
scalar_operators = st.sampled_from([
    ComparisonOperator.EQ, ComparisonOperator.NE, ComparisonOperator.LT,
    ComparisonOperator.LTE, ComparisonOperator.GT, ComparisonOperator.GTE,
])
list_operators = st.sampled_from([ComparisonOperator.IN, ComparisonOperator.NIN])

comparisons = st.one_of(
    st.builds(lambda op, key, value: Comparison(op, Key(key), Value(value)),
              scalar_operators, st.sampled_from(KEYS), scalars),
    st.builds(lambda op, key, values: Comparison(op, Key(key), Value(values)),
              list_operators, st.sampled_from(KEYS), st.lists(scalars, min_size=1, max_size=3)),
)


def _grouped(node):
    """Wrap AND/OR nodes so they keep their structure inside another connective."""
    if isinstance(node, BooleanOp) and node.operator != BooleanOperator.NOT:
        return Group(node)
    return node


def _extend(children):
    return st.one_of(
        st.builds(lambda ops: BooleanOp(BooleanOperator.AND, [_grouped(op) for op in ops]),
                  st.lists(children, min_size=1, max_size=3)),
        st.builds(lambda ops: BooleanOp(BooleanOperator.OR, [_grouped(op) for op in ops]),
                  st.lists(children, min_size=1, max_size=3)),
        st.builds(lambda op: BooleanOp(BooleanOperator.NOT, [_grouped(op)]), children),
        st.builds(Group, children),
    )


expressions = st.recursive(comparisons, _extend, max_leaves=8)

metadata_values = st.one_of(st.none(), scalars)
environments = st.fixed_dictionaries({key: metadata_values for key in KEYS})


def evaluate_tree(node, metadata):
    if isinstance(node, Comparison):
        right = list(node.right.value) if node.right.is_list else node.right.value
        return compare(SYMBOLS[node.operator], metadata.get(node.left.name), right)
    if isinstance(node, Group):
        return evaluate_tree(node.inner, metadata)
    values = [evaluate_tree(operand, metadata) for operand in node.operands]
    if node.operator == BooleanOperator.AND:
        return kleene_and(values)
    if node.operator == BooleanOperator.OR:
        return kleene_or(values)
    return kleene_not(values[0])


class TestStructuralRoundTrip:

    @settings(max_examples=300, deadline=None)
    @given(expression=expressions, metadata=environments)
    def test_compiled_predicate_matches_tree(self, expression, metadata):
        predicate = compile_filter(expression, "metadata")
        compiled = evaluate_predicate(predicate, metadata_lookup("metadata", metadata))
        assert compiled == evaluate_tree(expression, metadata), predicate

    @given(expression=expressions)
    def test_compilation_is_deterministic(self, expression):
        assert compile_filter(expression, "metadata") == compile_filter(expression, "metadata")
