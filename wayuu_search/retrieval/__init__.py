"""Retrieval pipeline module."""

from wayuu_search.retrieval.models import HitPayload, SearchResult
from wayuu_search.retrieval.normalizer import normalize_hit, normalize_payload
from wayuu_search.retrieval.retriever import Retriever, SemanticRetriever

__all__ = [
    "HitPayload",
    "Retriever",
    "SearchResult",
    "SemanticRetriever",
    "normalize_hit",
    "normalize_payload",
]
