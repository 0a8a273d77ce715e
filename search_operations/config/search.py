"""
Search Request

Parameters of a single similarity search.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from filter_operations.models.expressions import EXPRESSION_TYPES, FilterExpression
from ..core.search_ops_exceptions import InvalidSearchParametersError

DEFAULT_TOP_K = 4
SIMILARITY_THRESHOLD_ACCEPT_ALL = 0.0


@dataclass
class SearchRequest:
    """
    Similarity search request.

    Either ``query_embedding`` or ``query`` must be given. When only the query
    text is present the store embeds it with its embedding provider.

    Attributes:
        query: Query text
        query_embedding: Precomputed query vector
        top_k: Maximum number of documents to return
        similarity_threshold: Lower bound applied to the computed distance column
        filter_expression: Optional metadata filter
    """
    query: Optional[str] = None
    query_embedding: Optional[Sequence[float]] = None
    top_k: int = DEFAULT_TOP_K
    similarity_threshold: float = SIMILARITY_THRESHOLD_ACCEPT_ALL
    filter_expression: Optional[FilterExpression] = None

    def __post_init__(self):
        """Validate the request after initialization"""
        if self.query_embedding is None and self.query is None:
            raise InvalidSearchParametersError("Either query or query_embedding must be provided")
        if self.query_embedding is not None and len(self.query_embedding) == 0:
            raise InvalidSearchParametersError("query_embedding must not be empty")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k <= 0:
            raise InvalidSearchParametersError(f"top_k must be a positive integer, got {self.top_k!r}")
        if isinstance(self.similarity_threshold, bool) or not isinstance(self.similarity_threshold, (int, float)):
            raise InvalidSearchParametersError(
                f"similarity_threshold must be a number, got {self.similarity_threshold!r}"
            )
        if self.filter_expression is not None and not isinstance(self.filter_expression, EXPRESSION_TYPES):
            raise InvalidSearchParametersError(
                f"Unsupported filter expression: {type(self.filter_expression).__name__}"
            )
