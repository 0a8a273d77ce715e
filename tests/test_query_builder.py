"""Tests for search and delete statement building."""

import pytest

from clickhouse_ops_exceptions import InvalidArgumentError
from config import DistanceType
from filter_operations import FilterExpressionBuilder, InvalidFilterError, UnsupportedOperatorError, Comparison, Key, Value
from search_operations.core.query_builder import (
    NO_OP,
    NoOpQuery,
    SearchQueryBuilder,
    format_vector,
    search_parameters,
)
from table_operations import TableSchema

b = FilterExpressionBuilder()

EXPECTED_SEARCH = """\
WITH {query_vector:Array(Float32)} AS reference_vector
SELECT id, content, metadata, cosineDistance(embedding, reference_vector) AS distance
FROM ai.vector_store
WHERE distance >= {similarity_threshold:Float64}
ORDER BY distance
LIMIT {top_k:UInt32}"""


@pytest.fixture
def table():
    return TableSchema(database_name="ai", table_name="vector_store")


@pytest.fixture
def builder(table):
    return SearchQueryBuilder(table, DistanceType.COSINE)


class TestSearchQuery:

    def test_without_filter(self, builder):
        assert builder.build_search_query() == EXPECTED_SEARCH

    def test_filter_is_anded_in_parentheses(self, builder):
        query = builder.build_search_query(b.or_(b.eq("meta1", "meta1"), b.eq("meta2", "meta2")))
        assert "WHERE distance >= {similarity_threshold:Float64}\n" \
               "  AND (metadata.meta1 == 'meta1' OR metadata.meta2 == 'meta2')\n" \
               "ORDER BY distance" in query

    def test_l2_function(self, table):
        query = SearchQueryBuilder(table, DistanceType.L2).build_search_query()
        assert "L2Distance(embedding, reference_vector) AS distance" in query

    def test_custom_columns_and_no_database(self):
        table = TableSchema(database_name="", table_name="docs", id_column="doc_id",
                            content_column="body", embedding_column="vec", metadata_column="attrs")
        query = SearchQueryBuilder(table).build_search_query(b.eq("k", 1))
        assert "SELECT doc_id, body, attrs, cosineDistance(vec, reference_vector) AS distance" in query
        assert "FROM docs\n" in query
        assert "AND (attrs.k == 1)" in query

    def test_three_named_parameters(self, builder):
        query = builder.build_search_query()
        for placeholder in ("{query_vector:Array(Float32)}", "{similarity_threshold:Float64}", "{top_k:UInt32}"):
            assert query.count(placeholder) == 1

    def test_unsupported_operator_raises(self, builder):
        with pytest.raises(UnsupportedOperatorError):
            builder.build_search_query(Comparison("LIKE", Key("k"), Value("x")))


class TestDeleteByFilter:

    def test_statement(self, builder):
        query = builder.build_delete_by_filter(b.eq("k", None))
        assert query == "DELETE FROM ai.vector_store WHERE metadata.k IS NULL"

    def test_missing_filter(self, builder):
        with pytest.raises(InvalidFilterError):
            builder.build_delete_by_filter(None)


class TestDeleteByIds:

    def test_statement(self, builder):
        query = builder.build_delete_by_ids(["1", "2"])
        assert query == "DELETE FROM ai.vector_store WHERE id IN ('1','2')"
        assert "IN ('1','2')" in query

    def test_empty_ids_is_no_op(self, builder):
        query = builder.build_delete_by_ids([])
        assert query is NO_OP
        assert not query
        assert query != ""
        assert query != "DELETE FROM ai.vector_store WHERE id IN ()"
        assert not isinstance(query, str)

    @pytest.mark.parametrize("single", ["1", b"1"])
    def test_single_string_rejected(self, builder, single):
        with pytest.raises(InvalidArgumentError):
            builder.build_delete_by_ids(single)

    def test_no_op_is_singleton(self):
        assert NoOpQuery() is NO_OP
        assert repr(NO_OP) == "NO_OP"


class TestParameters:

    def test_format_vector(self):
        assert format_vector([1, 0.5, -2.0]) == "[1.0,0.5,-2.0]"

    def test_search_parameters(self):
        assert search_parameters([0.1, 0.2], 0.5, 3) == {
            "query_vector": "[0.1,0.2]",
            "similarity_threshold": 0.5,
            "top_k": 3,
        }
