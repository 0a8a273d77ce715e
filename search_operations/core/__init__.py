"""
Core Search Components

Contains the statement builder and the result mapper used by the vector store.
"""

from .query_builder import (
    SearchQueryBuilder,
    NoOpQuery,
    NO_OP,
    DISTANCE_COLUMN,
    QUERY_VECTOR_PARAMETER,
    SIMILARITY_THRESHOLD_PARAMETER,
    TOP_K_PARAMETER,
    format_vector,
    search_parameters,
)
from .result_mapper import ResultMapper, DISTANCE_METADATA_KEY
from .search_ops_exceptions import (
    SearchError,
    InvalidSearchParametersError,
    EmbeddingGenerationError,
    ResultMappingError,
)

__all__ = [
    'SearchQueryBuilder',
    'NoOpQuery',
    'NO_OP',
    'DISTANCE_COLUMN',
    'QUERY_VECTOR_PARAMETER',
    'SIMILARITY_THRESHOLD_PARAMETER',
    'TOP_K_PARAMETER',
    'format_vector',
    'search_parameters',
    'ResultMapper',
    'DISTANCE_METADATA_KEY',
    'SearchError',
    'InvalidSearchParametersError',
    'EmbeddingGenerationError',
    'ResultMappingError',
]
