"""
Data Management Operations Exceptions

Exception hierarchy for encoding document batches before they are written.
"""

from typing import Optional

from clickhouse_ops_exceptions import ClickHouseOpsError, InvalidArgumentError


class DataOperationError(ClickHouseOpsError):
    """
    Base exception for all data management operation errors.

    This serves as the parent class for all data operation-specific
    exceptions, allowing external projects to catch all data operation
    errors with a single except clause if desired.
    """
    pass


class EncodingError(DataOperationError):
    """
    Raised when a document cannot be serialized into the insert payload.

    Attributes:
        document_id: Identifier of the offending document, when known
    """

    def __init__(self, message: str, document_id: Optional[str] = None):
        self.document_id = document_id
        super().__init__(message)


class EmbeddingCountMismatchError(DataOperationError, InvalidArgumentError):
    """Raised when the number of embeddings differs from the number of documents"""

    def __init__(self, document_count: int, embedding_count: int):
        self.document_count = document_count
        self.embedding_count = embedding_count
        super().__init__(
            f"Got {embedding_count} embeddings for {document_count} documents"
        )
