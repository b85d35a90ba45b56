"""Render retrieved passages into the grounding context block."""

from collections.abc import Sequence

from wayuu_search.retrieval.models import SearchResult

DEFAULT_MAX_RESULTS = 5
DEFAULT_MAX_PASSAGE_CHARS = 800

BLOCK_TEMPLATE = (
    "\n--- Result {rank} (Relevance: {score:.3f}) ---\n"
    "Document: {source}\n"
    "Fragment {position}/{total}\n"
    "Content: {text}\n"
)


def format_result(
    rank: int,
    result: SearchResult,
    max_passage_chars: int = DEFAULT_MAX_PASSAGE_CHARS,
) -> str:
    """Render one result; the passage is cut hard at max_passage_chars."""
    payload = result.payload
    return BLOCK_TEMPLATE.format(
        rank=rank,
        score=result.score,
        source=payload.source,
        position=payload.chunk_index + 1,
        total=payload.total_chunks,
        text=payload.text[:max_passage_chars],
    )


def assemble_context(
    results: Sequence[SearchResult],
    max_results: int = DEFAULT_MAX_RESULTS,
    max_passage_chars: int = DEFAULT_MAX_PASSAGE_CHARS,
) -> str:
    """Concatenate the first ``max_results`` results in the given order.

    No re-ranking and no deduplication by source. An empty sequence yields
    an empty string.
    """
    return "".join(
        format_result(rank, result, max_passage_chars)
        for rank, result in enumerate(results[:max_results], start=1)
    )
