"""
ClickHouse Vector Store

Stores documents with their embeddings and metadata in a ClickHouse table and
retrieves the documents nearest to a query vector, optionally restricted by a
metadata filter.

Each public operation compiles exactly one statement (or payload) and makes
exactly one client round trip, bounded by the configured timeout. Filters and
payloads are fully built before the client is called, so compile and encoding
errors never reach the server. Failures reported by the client are re-raised
as ``ExecutionError`` (``OperationTimeoutError`` for timeouts) naming the
operation, with the client's exception as the cause. Nothing is retried.

Typical usage:

    from connection_management import create_client
    from filter_operations import FilterExpressionBuilder
    from search_operations import SearchRequest
    from vector_store import VectorStoreConfig, create_vector_store

    store = create_vector_store(create_client(), VectorStoreConfig(dimensions=3))
    store.add(documents, embeddings)

    b = FilterExpressionBuilder()
    hits = store.similarity_search(SearchRequest(
        query_embedding=[0.1, 0.2, 0.3],
        top_k=5,
        filter_expression=b.eq("author", "john"),
    ))
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from clickhouse_ops_exceptions import (
    ConfigurationError,
    ExecutionError,
    InvalidArgumentError,
    OperationTimeoutError,
)
from connection_management.client import QueryClient, is_timeout_error
from data_management_operations.core.encoder import IngestEncoder
from data_management_operations.models.entities import Document
from filter_operations.models.expressions import FilterExpression
from search_operations.config.distance import similarity_metric
from search_operations.config.search import SearchRequest
from search_operations.core.query_builder import NO_OP, SearchQueryBuilder, search_parameters
from search_operations.core.result_mapper import ResultMapper
from search_operations.core.search_ops_exceptions import EmbeddingGenerationError, InvalidSearchParametersError
from search_operations.providers.embedding import EmbeddingProvider
from table_operations.schema import SchemaBuilder
from utils.timing import time_operation
from vector_store.store_config import VectorStoreConfig

logger = logging.getLogger(__name__)


class ClickHouseVectorStore:
    """
    Vector store backed by a ClickHouse table.

    The store keeps no mutable state besides the client reference, so a single
    instance can serve concurrent callers as long as the client can.
    """

    def __init__(
        self,
        client: QueryClient,
        config: Optional[VectorStoreConfig] = None,
        embedding_provider: Optional[EmbeddingProvider] = None
    ):
        """
        Args:
            client: Query-execution client
            config: Store configuration; defaults apply when None
            embedding_provider: Used only when embeddings or a query vector are not supplied
        """
        if client is None:
            raise ConfigurationError("A query client is required")
        self.config = config if config is not None else VectorStoreConfig()
        self.table = self.config.table_schema
        self._client = client
        self._embedding_provider = embedding_provider
        self._encoder = IngestEncoder(self.table)
        self._query_builder = SearchQueryBuilder(self.table, self.config.distance_type)
        self._result_mapper = ResultMapper(self.table)
        self._schema_builder = SchemaBuilder(self.table)

    @property
    def similarity_metric(self) -> str:
        """Display name of the configured distance ("cosine", "euclidean")."""
        return similarity_metric(self.config.distance_type)

    def add(self, documents: Sequence[Document], embeddings: Optional[Sequence[Sequence[float]]] = None) -> None:
        """
        Insert documents in a single bulk insert.

        Args:
            documents: Documents to insert
            embeddings: One embedding per document, aligned by position. When
                        omitted, document embeddings are used, or computed by
                        the embedding provider when any document lacks one.

        Raises:
            EmbeddingCountMismatchError: If embeddings and documents differ in count
            EncodingError: If a document cannot be serialized
            ExecutionError: If the insert fails
        """
        if not documents:
            logger.debug("No documents to add")
            return
        if embeddings is None:
            embeddings = self._resolve_embeddings(documents)

        payload = self._encoder.encode_batch(documents, embeddings)
        self._run("add", self._client.insert, self.table.full_table_name, payload, self.config.timeout)
        logger.info(f"Added {len(documents)} documents to {self.table.full_table_name}")

    def delete(self, ids: Sequence[str]) -> None:
        """
        Delete documents by identifier. An empty ``ids`` makes no call.

        Raises:
            InvalidArgumentError: If ``ids`` is a single string rather than a collection
            ExecutionError: If the delete fails
        """
        if isinstance(ids, (str, bytes)):
            raise InvalidArgumentError("ids must be a collection of identifiers, not a single string")
        ids = list(ids)
        query = self._query_builder.build_delete_by_ids(ids)
        if query is NO_OP:
            logger.debug("No ids to delete")
            return
        self._run("delete", self._client.execute, query, self.config.timeout)
        logger.info(f"Deleted {len(ids)} ids from {self.table.full_table_name}")

    def delete_by_filter(self, filter_expression: FilterExpression) -> None:
        """
        Delete every document matching ``filter_expression``.

        Raises:
            InvalidFilterError: If the filter is missing or malformed
            ExecutionError: If the delete fails
        """
        query = self._query_builder.build_delete_by_filter(filter_expression)
        logger.debug(f"Executing delete with filter: {query}")
        self._run("delete", self._client.execute, query, self.config.timeout)

    def similarity_search(self, request: SearchRequest) -> List[Document]:
        """
        Return up to ``request.top_k`` documents ordered by ascending distance.

        Each document carries ``score = 1 - distance`` both as ``score`` and
        as ``metadata["distance"]``.

        Raises:
            InvalidFilterError: If the filter is malformed
            InvalidSearchParametersError: If no query vector can be obtained
            ExecutionError: If the query fails
        """
        query = self._query_builder.build_search_query(request.filter_expression)
        query_vector = request.query_embedding
        if query_vector is None:
            query_vector = self._embed_query(request.query)

        parameters = search_parameters(query_vector, request.similarity_threshold, request.top_k)
        rows = self._run("search", self._client.query, query, parameters, self.config.timeout)
        documents = self._result_mapper.map_rows(rows)
        logger.debug(f"Search returned {len(documents)} documents")
        return documents

    def initialize_schema(self) -> None:
        """
        Create the database (when one is configured) and the vector table if missing.

        Raises:
            ConfigurationError: If the embedding dimension is unknown
            ExecutionError: If a DDL statement fails
        """
        dimensions = self.config.dimensions
        if dimensions is None and self._embedding_provider is not None:
            dimensions = self._embedding_provider.dimensions
        if dimensions is None:
            raise ConfigurationError("Embedding dimensions are required to create the vector table")

        create_table = self._schema_builder.build_create_table(self.config.distance_type, dimensions)
        if self.table.database_name:
            self._run("initialize_schema", self._client.execute,
                      self._schema_builder.build_create_database(), self.config.timeout)
        self._run("initialize_schema", self._client.execute, create_table, self.config.timeout)
        logger.info(f"Initialized vector table {self.table.full_table_name} ({dimensions} dimensions)")

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _resolve_embeddings(self, documents: Sequence[Document]) -> List[Any]:
        if all(doc.embedding is not None for doc in documents):
            return [doc.embedding for doc in documents]
        if self._embedding_provider is None:
            raise InvalidArgumentError(
                "Documents without embeddings require an embedding provider"
            )
        try:
            return list(self._embedding_provider.embed([doc.text or "" for doc in documents]))
        except Exception as e:
            raise EmbeddingGenerationError(f"Failed to embed {len(documents)} documents: {e}") from e

    def _embed_query(self, query: Optional[str]) -> List[float]:
        if self._embedding_provider is None:
            raise InvalidSearchParametersError(
                "A query embedding is required when no embedding provider is configured"
            )
        try:
            return self._embedding_provider.embed_query(query)
        except Exception as e:
            raise EmbeddingGenerationError(f"Failed to embed query: {e}") from e

    def _run(self, operation: str, func: Callable, *args: Any) -> Any:
        with time_operation(operation, table=self.table.full_table_name):
            try:
                return func(*args)
            except Exception as e:
                logger.error(f"'{operation}' on {self.table.full_table_name} failed: {e}")
                if is_timeout_error(e):
                    raise OperationTimeoutError(operation, e) from e
                raise ExecutionError(operation, e) from e


def create_vector_store(
    client: QueryClient,
    config: Optional[VectorStoreConfig] = None,
    embedding_provider: Optional[EmbeddingProvider] = None
) -> ClickHouseVectorStore:
    """
    Create a vector store, creating its schema first when configured to.

    Args:
        client: Query-execution client (required)
        config: Store configuration; defaults apply when None
        embedding_provider: Optional embedding provider

    Returns:
        Ready-to-use ClickHouseVectorStore

    Raises:
        ConfigurationError: If the client is missing or the schema cannot be sized
        ExecutionError: If schema creation fails
    """
    if client is None:
        raise ConfigurationError("A query client is required")
    store = ClickHouseVectorStore(client, config, embedding_provider)
    if store.config.initialize_schema:
        store.initialize_schema()
    return store
