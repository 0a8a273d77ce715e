"""
Result Mapper

Turns rows returned by a similarity search into Documents. Null metadata
values are dropped, and the similarity score derived from the computed
distance is stored both on ``Document.score`` and under the reserved
``distance`` metadata key. A caller metadata field named ``distance`` is
overwritten by the score.
"""

import json
from typing import Any, Dict, List, Mapping, Sequence, TYPE_CHECKING

from data_management_operations.models.entities import Document
from ..config.distance import score_from_distance
from .query_builder import DISTANCE_COLUMN
from .search_ops_exceptions import ResultMappingError

if TYPE_CHECKING:
    from table_operations.schema import TableSchema


DISTANCE_METADATA_KEY = "distance"


class ResultMapper:
    """Maps search result rows onto Documents for one table layout."""

    def __init__(self, table: "TableSchema"):
        self.table = table

    def map_rows(self, rows: Sequence[Mapping[str, Any]]) -> List[Document]:
        return [self.map_row(row) for row in rows]

    def map_row(self, row: Mapping[str, Any]) -> Document:
        """
        Map one result row.

        Args:
            row: Column name to value mapping holding the id, content,
                 metadata and computed distance columns

        Returns:
            Document with the score attached

        Raises:
            ResultMappingError: If a column is missing or the metadata is not a mapping
        """
        table = self.table
        try:
            doc_id = row[table.id_column]
            text = row[table.content_column]
            raw_metadata = row[table.metadata_column]
            distance = row[DISTANCE_COLUMN]
        except KeyError as e:
            raise ResultMappingError(f"Result row is missing column {e}") from e

        metadata = {key: value for key, value in _as_mapping(raw_metadata).items() if value is not None}
        score = score_from_distance(float(distance))
        metadata[DISTANCE_METADATA_KEY] = score
        return Document(id=str(doc_id), text=text, metadata=metadata, score=score)


def _as_mapping(raw_metadata: Any) -> Dict[str, Any]:
    if raw_metadata is None:
        return {}
    if isinstance(raw_metadata, (str, bytes)):
        try:
            raw_metadata = json.loads(raw_metadata)
        except ValueError as e:
            raise ResultMappingError(f"Metadata column does not hold valid JSON: {e}") from e
    if not isinstance(raw_metadata, Mapping):
        raise ResultMappingError(f"Metadata column must hold an object, got {type(raw_metadata).__name__}")
    return dict(raw_metadata)
