"""
Search Operations Module

This module provides the similarity search building blocks of the vector store:
- Distance function selection and the distance to score transform
- Parameterized nearest-neighbour and delete statement building
- Mapping of result rows into scored documents
- The embedding provider interface used for query text
"""

# Configuration exports
from .config import (
    function_name,
    similarity_metric,
    score_from_distance,
    SearchRequest,
)

# Core exports
from .core import (
    SearchQueryBuilder,
    ResultMapper,
    NoOpQuery,
    NO_OP,
    search_parameters,
    SearchError,
    InvalidSearchParametersError,
    EmbeddingGenerationError,
    ResultMappingError,
)

# Provider exports
from .providers import EmbeddingProvider

__all__ = [
    # Configuration
    "function_name",
    "similarity_metric",
    "score_from_distance",
    "SearchRequest",

    # Core
    "SearchQueryBuilder",
    "ResultMapper",
    "NoOpQuery",
    "NO_OP",
    "search_parameters",

    # Exceptions
    "SearchError",
    "InvalidSearchParametersError",
    "EmbeddingGenerationError",
    "ResultMappingError",

    # Providers
    "EmbeddingProvider",
]
