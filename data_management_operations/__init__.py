"""
Data Management Operations Module

Provides the document model and the encoder that turns document batches into
bulk insert payloads for the vector table:
- Pydantic Document model shared by ingest and search results
- JSONEachRow encoding, one record per document
- Encoding errors raised before any data is sent

Typical usage from external projects:

    from data_management_operations import Document, IngestEncoder, EncodingError

    encoder = IngestEncoder(table_schema)
    try:
        payload = encoder.encode_batch(documents, embeddings)
    except EncodingError as e:
        print(f"Document {e.document_id} could not be encoded: {e}")
"""

# Encoder
from .core.encoder import IngestEncoder, PAYLOAD_FORMAT

# Data models
from .models.entities import Document

# Exceptions
from .data_ops_exceptions import (
    DataOperationError,
    EncodingError,
    EmbeddingCountMismatchError,
)

__all__ = [
    'IngestEncoder',
    'PAYLOAD_FORMAT',
    'Document',
    'DataOperationError',
    'EncodingError',
    'EmbeddingCountMismatchError',
]
