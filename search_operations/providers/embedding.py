"""
Embedding Provider Interface

This module defines the interface the vector store uses to turn document text
and query text into embeddings when the caller does not supply them.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class EmbeddingProvider(ABC):
    """
    Abstract base class for embedding providers.

    Implementations wrap a concrete embedding model. Every vector a provider
    returns must have exactly ``dimensions`` elements.
    """

    @abstractmethod
    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Generate embeddings for a batch of texts.

        Args:
            texts: Texts to embed

        Returns:
            One embedding per input text, in input order
        """
        pass

    def embed_query(self, text: str) -> List[float]:
        """Generate the embedding for a single query text."""
        return self.embed([text])[0]

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Length of every embedding this provider produces."""
        pass
