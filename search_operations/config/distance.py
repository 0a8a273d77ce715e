"""
Distance Policy

Maps each supported distance type to the native ClickHouse distance function,
to the display name reported for the similarity metric, and to the score
derived from a raw distance.
"""

from typing import Union

from config.settings import DistanceType

FUNCTION_NAMES = {
    DistanceType.COSINE: "cosineDistance",
    DistanceType.L2: "L2Distance",
}

SIMILARITY_METRIC_NAMES = {
    DistanceType.COSINE: "cosine",
    DistanceType.L2: "euclidean",
}


def function_name(distance_type: Union[DistanceType, str]) -> str:
    """
    Native distance function for a distance type.

    Raises:
        ValueError: If the distance type is unknown
    """
    return FUNCTION_NAMES[DistanceType(distance_type)]


def similarity_metric(distance_type: Union[DistanceType, str]) -> str:
    """
    Display name of the similarity metric.

    Distance types without a known metric name fall back to their own name.
    """
    name = getattr(distance_type, "name", str(distance_type))
    return SIMILARITY_METRIC_NAMES.get(distance_type, name)


def score_from_distance(distance: float) -> float:
    """Similarity score for a raw distance: ``1.0 - distance`` for every distance type."""
    return 1.0 - distance
