"""
Data Entities

Defines the Pydantic model for documents stored in and returned from the
vector table.

Typical usage from external projects:

    from data_management_operations import Document

    doc = Document(id="1", text="hello", metadata={"author": "john"})

    # Documents returned by a similarity search also carry a score
    for hit in store.similarity_search(request):
        print(hit.id, hit.score, hit.metadata["distance"])
"""

from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Document(BaseModel):
    """
    Document stored in the vector table.

    ``id`` is assigned by the caller. ``embedding`` is optional because the
    store can compute it with an embedding provider, and because search
    results are returned without their vectors. ``score`` is only set on
    documents produced by a similarity search.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    id: str = Field(..., description="Caller-assigned document identifier")
    text: Optional[str] = Field(None, description="Document content")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Flat mapping of metadata fields")
    embedding: Optional[List[float]] = Field(None, description="Embedding vector")
    score: Optional[float] = Field(None, description="Similarity score (1 - distance) of a search hit")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Identifiers must be non-empty"""
        if not v:
            raise ValueError("Document id must not be empty")
        return v

    @field_validator('metadata', mode='before')
    @classmethod
    def default_metadata(cls, v):
        return {} if v is None else v

    @field_validator('embedding', mode='before')
    @classmethod
    def validate_embedding(cls, v):
        """Accept any flat numeric sequence, including numpy arrays."""
        if v is None:
            return v
        vector = np.asarray(v, dtype=float)
        if vector.ndim != 1:
            raise ValueError("Embedding must be a flat sequence of numbers")
        return vector.tolist()
