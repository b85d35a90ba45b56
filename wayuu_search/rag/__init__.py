"""Search pipeline module."""

from wayuu_search.rag.answer import (
    FALLBACK_MESSAGE,
    NO_RESPONSE_MESSAGE,
    AnswerGenerator,
)
from wayuu_search.rag.context import assemble_context
from wayuu_search.rag.models import SearchResponse
from wayuu_search.rag.pipeline import SearchPipeline

__all__ = [
    "FALLBACK_MESSAGE",
    "NO_RESPONSE_MESSAGE",
    "AnswerGenerator",
    "SearchPipeline",
    "SearchResponse",
    "assemble_context",
]
