"""
Similarity Query Builder

Composes the statements the vector store sends to ClickHouse:
- a parameterized nearest-neighbour search
- a delete restricted by a metadata filter
- a delete by document identifiers

The search statement carries three server-side parameters that are bound at
execution time (see ``search_parameters``). Delete statements are complete
and take no parameters. Filters are compiled before anything is returned, so
a malformed filter never produces a partial statement.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Union, TYPE_CHECKING

from clickhouse_ops_exceptions import InvalidArgumentError
from config.settings import DistanceType
from filter_operations.core.converter import FilterExpressionConverter
from filter_operations.filter_ops_exceptions import InvalidFilterError
from filter_operations.models.expressions import FilterExpression
from ..config.distance import function_name

if TYPE_CHECKING:
    from table_operations.schema import TableSchema

logger = logging.getLogger(__name__)

QUERY_VECTOR_PARAMETER = "query_vector"
SIMILARITY_THRESHOLD_PARAMETER = "similarity_threshold"
TOP_K_PARAMETER = "top_k"

DISTANCE_COLUMN = "distance"

SEARCH_QUERY_TEMPLATE = """\
WITH {{{vector_param}:Array(Float32)}} AS reference_vector
SELECT {id_column}, {content_column}, {metadata_column}, {function}({embedding_column}, reference_vector) AS {distance}
FROM {table}
WHERE {distance} >= {{{threshold_param}:Float64}}{filter_clause}
ORDER BY {distance}
LIMIT {{{top_k_param}:UInt32}}"""


class NoOpQuery:
    """
    Marker returned instead of a statement when there is nothing to execute.

    It is falsy and never equal to a string, so callers can test for it with
    either ``if not query`` or ``query is NO_OP``.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __eq__(self, other):
        return other is self

    def __hash__(self):
        return id(self)

    def __repr__(self):
        return "NO_OP"


NO_OP = NoOpQuery()


class SearchQueryBuilder:
    """
    Builds search and delete statements for one vector table.

    The builder holds only the table layout and the distance type; every
    method is a pure function of its arguments.
    """

    def __init__(self, table: "TableSchema", distance_type: Union[DistanceType, str] = DistanceType.COSINE):
        """
        Args:
            table: Vector table layout
            distance_type: Distance function used to rank documents
        """
        self.table = table
        self.distance_type = distance_type
        self._converter = FilterExpressionConverter(table.metadata_column)

    def build_search_query(self, filter_expression: Optional[FilterExpression] = None) -> str:
        """
        Build the parameterized similarity search statement.

        Rows are kept when their computed distance is at least the bound
        threshold, ordered by ascending distance and capped at the bound
        limit. A filter, when given, is ANDed in within its own parentheses.

        Args:
            filter_expression: Optional metadata filter

        Returns:
            Statement expecting the ``query_vector``, ``similarity_threshold``
            and ``top_k`` parameters

        Raises:
            InvalidFilterError: If the filter is malformed
            UnsupportedOperatorError: If the filter uses an unknown operator
        """
        filter_clause = ""
        if filter_expression is not None:
            filter_clause = f"\n  AND ({self._converter.convert(filter_expression)})"

        table = self.table
        query = SEARCH_QUERY_TEMPLATE.format(
            vector_param=QUERY_VECTOR_PARAMETER,
            threshold_param=SIMILARITY_THRESHOLD_PARAMETER,
            top_k_param=TOP_K_PARAMETER,
            id_column=table.id_column,
            content_column=table.content_column,
            metadata_column=table.metadata_column,
            embedding_column=table.embedding_column,
            function=function_name(self.distance_type),
            distance=DISTANCE_COLUMN,
            table=table.full_table_name,
            filter_clause=filter_clause,
        )
        logger.debug(f"Built search query: {query}")
        return query

    def build_delete_by_filter(self, filter_expression: Optional[FilterExpression]) -> str:
        """
        Build a delete of every row matching ``filter_expression``.

        Raises:
            InvalidFilterError: If no filter is given or it is malformed
        """
        if filter_expression is None:
            raise InvalidFilterError("Filter expression is required for delete by filter")
        predicate = self._converter.convert(filter_expression)
        return f"DELETE FROM {self.table.full_table_name} WHERE {predicate}"

    def build_delete_by_ids(self, ids: Sequence[str]) -> Union[str, NoOpQuery]:
        """
        Build a delete of the rows whose identifier is in ``ids``.

        Identifiers are single-quoted as given, without escaping.

        Returns:
            The statement, or ``NO_OP`` when ``ids`` is empty

        Raises:
            InvalidArgumentError: If ``ids`` is a single string
        """
        if isinstance(ids, (str, bytes)):
            raise InvalidArgumentError("ids must be a collection of identifiers, not a single string")
        if not ids:
            return NO_OP
        id_list = ",".join(f"'{doc_id}'" for doc_id in ids)
        return f"DELETE FROM {self.table.full_table_name} WHERE {self.table.id_column} IN ({id_list})"


def format_vector(vector: Sequence[float]) -> str:
    """Render a vector in the ``[x,y,...]`` text form bound to ``query_vector``."""
    return "[" + ",".join(repr(float(x)) for x in vector) + "]"


def search_parameters(query_vector: Sequence[float], similarity_threshold: float, top_k: int) -> Dict[str, Any]:
    """Parameter bindings for a statement built by ``build_search_query``."""
    return {
        QUERY_VECTOR_PARAMETER: format_vector(query_vector),
        SIMILARITY_THRESHOLD_PARAMETER: float(similarity_threshold),
        TOP_K_PARAMETER: int(top_k),
    }
