"""Vector store module."""

from wayuu_search.vectorstore.models import VectorHit
from wayuu_search.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "QdrantVectorStore",
    "VectorHit",
    "VectorStore",
]
