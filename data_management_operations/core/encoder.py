"""
Ingest Encoder

Serializes a batch of documents and their embeddings into the payload of a
single bulk insert. The payload is JSONEachRow: one UTF-8 encoded JSON object
per line, one line per document, keyed by the table's column names.

Metadata is written exactly as given, null values included. Rows read back by
a similarity search have their null metadata values dropped by the result
mapper, so a null written here is indistinguishable from an absent key on
the read side.

Typical usage from external projects:

    from data_management_operations import IngestEncoder
    from table_operations import TableSchema

    encoder = IngestEncoder(TableSchema(database_name="ai", table_name="vector_store"))
    payload = encoder.encode_batch(documents, embeddings)
    client.insert(encoder.table.full_table_name, payload, timeout=10.0)
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

import numpy as np

from data_management_operations.data_ops_exceptions import EmbeddingCountMismatchError, EncodingError
from data_management_operations.models.entities import Document

if TYPE_CHECKING:
    from table_operations.schema import TableSchema

logger = logging.getLogger(__name__)

PAYLOAD_FORMAT = "JSONEachRow"
PAYLOAD_ENCODING = "utf-8"


class IngestEncoder:
    """
    Encodes document batches into JSONEachRow insert payloads.

    The encoder only reads the column names of ``table`` and keeps no other
    state, so one instance can serve concurrent callers.
    """

    def __init__(self, table: "TableSchema"):
        self.table = table

    def encode_batch(
        self,
        documents: Sequence[Document],
        embeddings: Optional[Sequence[Sequence[float]]] = None
    ) -> bytes:
        """
        Encode documents into a bulk insert payload.

        Args:
            documents: Documents to write
            embeddings: One embedding per document, aligned by position. When
                        omitted, each document's own ``embedding`` is used.

        Returns:
            JSONEachRow payload bytes

        Raises:
            EmbeddingCountMismatchError: If the embedding count differs from the document count
            EncodingError: If a document cannot be serialized
        """
        if embeddings is None:
            embeddings = [doc.embedding for doc in documents]
        if len(embeddings) != len(documents):
            raise EmbeddingCountMismatchError(len(documents), len(embeddings))

        lines: List[bytes] = []
        for document, embedding in zip(documents, embeddings):
            record = self.encode_record(document, embedding)
            lines.append(self._serialize(record, document.id))

        logger.debug(f"Encoded {len(lines)} documents as {PAYLOAD_FORMAT}")
        return b"".join(line + b"\n" for line in lines)

    def encode_record(self, document: Document, embedding: Optional[Sequence[float]]) -> Dict[str, Any]:
        """Build the column-keyed record for one document."""
        table = self.table
        return {
            table.id_column: document.id,
            table.embedding_column: _to_float_list(embedding, document.id),
            table.content_column: document.text,
            table.metadata_column: dict(document.metadata),
        }

    @staticmethod
    def _serialize(record: Dict[str, Any], document_id: str) -> bytes:
        try:
            return json.dumps(record, ensure_ascii=False, allow_nan=False).encode(PAYLOAD_ENCODING)
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"Document '{document_id}' is not representable in {PAYLOAD_ENCODING}: {e}",
                document_id=document_id,
            ) from e
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Failed to serialize document '{document_id}': {e}", document_id=document_id) from e


def _to_float_list(embedding: Optional[Sequence[float]], document_id: str) -> List[float]:
    if embedding is None:
        raise EncodingError(f"Document '{document_id}' has no embedding", document_id=document_id)
    try:
        vector = np.asarray(embedding, dtype=float)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Embedding of document '{document_id}' is not numeric: {e}", document_id=document_id) from e
    if vector.ndim != 1:
        raise EncodingError(f"Embedding of document '{document_id}' must be flat", document_id=document_id)
    return vector.tolist()
