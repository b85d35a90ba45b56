"""Embedding service module."""

from wayuu_search.embeddings.hashing import hash_embedding
from wayuu_search.embeddings.models import EmbeddingResult, EmbeddingStrategy
from wayuu_search.embeddings.service import (
    EmbeddingService,
    GeminiEmbeddingService,
    HashEmbeddingService,
    ResilientEmbeddingService,
)

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "EmbeddingStrategy",
    "GeminiEmbeddingService",
    "HashEmbeddingService",
    "ResilientEmbeddingService",
    "hash_embedding",
]
