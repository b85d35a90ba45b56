"""Search pipeline orchestrator."""

import time

from wayuu_search.exceptions import WayuuSearchError
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_search_query
from wayuu_search.rag.answer import AnswerGenerator
from wayuu_search.rag.context import (
    DEFAULT_MAX_PASSAGE_CHARS,
    DEFAULT_MAX_RESULTS,
    assemble_context,
)
from wayuu_search.rag.models import SearchResponse
from wayuu_search.retrieval.retriever import Retriever

logger = get_logger(__name__)


class SearchPipeline:
    """Orchestrates retrieval and answer generation.

    Losing retrieval aborts the request with an error response; losing
    generation only replaces the answer with a fixed message.
    """

    def __init__(
        self,
        retriever: Retriever,
        answer_generator: AnswerGenerator,
        context_results: int = DEFAULT_MAX_RESULTS,
        max_passage_chars: int = DEFAULT_MAX_PASSAGE_CHARS,
    ) -> None:
        """Initialize the search pipeline.

        Args:
            retriever: Passage retriever.
            answer_generator: Grounded answer generator.
            context_results: Results rendered into the answer context.
            max_passage_chars: Passage characters kept per context block.
        """
        self._retriever = retriever
        self._answer_generator = answer_generator
        self._context_results = context_results
        self._max_passage_chars = max_passage_chars

    async def perform_search(self, query: str, limit: int = 5) -> SearchResponse:
        """Run a semantic search and answer the query from its results.

        Args:
            query: The user's query.
            limit: Requested number of results (the vector store caps it).

        Returns:
            SearchResponse with results and answer, or with an error message.
        """
        start = time.perf_counter()
        logger.info(
            "Starting semantic search",
            extra={"query_length": len(query), "limit": limit},
        )

        try:
            results = await self._retriever.retrieve(query=query, top_k=limit)
        except WayuuSearchError as e:
            track_search_query(time.perf_counter() - start, success=False)
            logger.error(
                f"Semantic search failed: {e.message}",
                extra={"error": e.to_dict()},
            )
            return SearchResponse(query=query, results=[], error=e.message)

        logger.info(f"Search completed, results: {len(results)}")

        context = assemble_context(
            results,
            max_results=self._context_results,
            max_passage_chars=self._max_passage_chars,
        )
        ai_response = await self._answer_generator.generate_answer(query, context)

        track_search_query(time.perf_counter() - start)
        logger.info(
            "Semantic search completed",
            extra={"results_count": len(results)},
        )

        return SearchResponse(query=query, results=results, ai_response=ai_response)
