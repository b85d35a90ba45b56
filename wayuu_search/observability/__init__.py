"""Observability module for metrics and request logging."""

from wayuu_search.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
    track_answer_fallback,
    track_embedding_request,
    track_llm_request,
    track_retrieval_request,
    track_search_query,
    track_vectorstore_operation,
)
from wayuu_search.observability.request_logging import RequestLoggingMiddleware

__all__ = [
    "MetricsMiddleware",
    "RequestLoggingMiddleware",
    "get_metrics",
    "get_metrics_content_type",
    "track_answer_fallback",
    "track_embedding_request",
    "track_llm_request",
    "track_retrieval_request",
    "track_search_query",
    "track_vectorstore_operation",
]
