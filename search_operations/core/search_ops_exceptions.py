"""
Search Operations Exceptions

This module defines custom exceptions for similarity search and for mapping
result rows back into documents.
"""

from clickhouse_ops_exceptions import ClickHouseOpsError, InvalidArgumentError


class SearchError(ClickHouseOpsError):
    """Base exception for all search-related errors"""
    pass


class InvalidSearchParametersError(SearchError, InvalidArgumentError):
    """Raised when search parameters are invalid"""
    pass


class EmbeddingGenerationError(SearchError):
    """Raised when the embedding provider fails to embed a query"""
    pass


class ResultMappingError(SearchError):
    """Raised when a result row lacks a required column or holds malformed metadata"""
    pass
