"""Retriever interface and implementations."""

from abc import ABC, abstractmethod

from wayuu_search.embeddings.service import EmbeddingService
from wayuu_search.exceptions import ErrorCode, RetrievalError, WayuuSearchError
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_retrieval_request
from wayuu_search.retrieval.models import SearchResult
from wayuu_search.retrieval.normalizer import normalize_hit
from wayuu_search.vectorstore.service import VectorStore

logger = get_logger(__name__)


class Retriever(ABC):
    """Abstract base class for retrievers.

    Defines the interface for retrieving relevant passages.
    """

    @abstractmethod
    async def retrieve(
        self,
        query: str,
        top_k: int = 5,
    ) -> list[SearchResult]:
        """Retrieve relevant passages for a query.

        Args:
            query: The search query.
            top_k: Maximum number of results to return.

        Returns:
            List of results in backend rank order.

        Raises:
            WayuuSearchError: If retrieval fails.
        """
        ...


class SemanticRetriever(Retriever):
    """Semantic search retriever using embeddings and vector store.

    Embeds the query, finds similar vectors in the store and normalizes
    the hits.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        collection: str,
    ) -> None:
        """Initialize the semantic retriever.

        Args:
            embedding_service: Service for generating embeddings.
            vector_store: Vector database for similarity search.
            collection: Name of the collection to search.
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection = collection

    async def retrieve(
        self,
        query: str,
        top_k: int = 5,
    ) -> list[SearchResult]:
        """Retrieve passages using semantic similarity.

        Embedding and vector store errors propagate as raised; anything
        unexpected is wrapped in RetrievalError.
        """
        try:
            embedding_result = await self._embedding_service.embed(query)
            logger.info(
                f"Embedding ready, length: {embedding_result.dimensions}",
                extra={
                    "model": embedding_result.model,
                    "strategy": embedding_result.strategy.value,
                },
            )

            hits = await self._vector_store.search(
                collection=self._collection,
                vector=embedding_result.embedding,
                limit=top_k,
            )

        except WayuuSearchError:
            raise
        except Exception as e:
            logger.error(f"Retrieval failed: {e}")
            raise RetrievalError(
                f"Failed to retrieve documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"query": query[:100], "error": str(e)},
            ) from e

        results = [normalize_hit(hit) for hit in hits]
        track_retrieval_request(
            chunks_returned=len(results),
            top_score=results[0].score if results else 0.0,
        )

        logger.debug(
            f"Retrieved {len(results)} results for query",
            extra={
                "query_length": len(query),
                "top_k": top_k,
                "results_count": len(results),
            },
        )

        return results
