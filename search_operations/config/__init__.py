"""
Search Configuration Module

This module provides the distance/similarity policy and the search request
model.
"""

from .distance import (
    FUNCTION_NAMES,
    SIMILARITY_METRIC_NAMES,
    function_name,
    similarity_metric,
    score_from_distance,
)
from .search import SearchRequest, DEFAULT_TOP_K, SIMILARITY_THRESHOLD_ACCEPT_ALL

__all__ = [
    # Distance policy
    "FUNCTION_NAMES",
    "SIMILARITY_METRIC_NAMES",
    "function_name",
    "similarity_metric",
    "score_from_distance",

    # Request
    "SearchRequest",
    "DEFAULT_TOP_K",
    "SIMILARITY_THRESHOLD_ACCEPT_ALL",
]
