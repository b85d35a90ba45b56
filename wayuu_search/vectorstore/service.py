"""Vector store interface and Qdrant implementation."""

import time
from abc import ABC, abstractmethod

from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import UnexpectedResponse

from wayuu_search.config import QdrantSettings, get_settings
from wayuu_search.exceptions import ErrorCode, VectorStoreError
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_vectorstore_operation
from wayuu_search.vectorstore.models import VectorHit

logger = get_logger(__name__)


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Read-only: the corpus is indexed by a separate ingestion process.
    """

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists.

        Args:
            name: Collection name.

        Returns:
            True if collection exists.
        """
        ...

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[VectorHit]:
        """Search for similar vectors.

        Args:
            collection: Collection name.
            vector: Query vector.
            limit: Maximum results to return.

        Returns:
            Hits in backend rank order, with payloads and without vectors.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None


def _error_code_for(error: Exception) -> ErrorCode:
    """Map a backend failure to an error code."""
    if isinstance(error, UnexpectedResponse):
        if error.status_code == 404:
            return ErrorCode.COLLECTION_NOT_FOUND
        if error.status_code in (401, 403):
            return ErrorCode.VECTOR_STORE_AUTH_ERROR
    return ErrorCode.VECTOR_STORE_ERROR


class QdrantVectorStore(VectorStore):
    """Qdrant vector store implementation."""

    def __init__(
        self,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings or get_settings().qdrant
        self._client = client
        self._owns_client = client is None

    @property
    def max_limit(self) -> int:
        """Hard ceiling applied to every search."""
        return self._settings.max_limit

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=self._settings.api_key.get_secret_value(),
                timeout=self._settings.timeout,
                check_compatibility=False,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection: {e}",
                code=_error_code_for(e),
                details={"collection": name, "error": str(e)},
            ) from e

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[VectorHit]:
        """Search for similar vectors, never asking for more than max_limit."""
        client = await self._get_client()
        effective_limit = min(limit, self.max_limit)
        start = time.perf_counter()

        try:
            results = await client.query_points(
                collection_name=collection,
                query=vector,
                limit=effective_limit,
                with_payload=True,
                with_vectors=False,
            )
        except Exception as e:
            track_vectorstore_operation("search", time.perf_counter() - start, False)
            logger.error(
                f"Vector search failed: {e}",
                extra={"collection": collection, "limit": effective_limit},
            )
            raise VectorStoreError(
                str(e) or f"Vector search failed in collection {collection}",
                code=_error_code_for(e),
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("search", time.perf_counter() - start, True)
        logger.debug(
            f"Vector search returned {len(results.points)} hits",
            extra={"collection": collection, "limit": effective_limit},
        )

        return [
            VectorHit(
                id=point.id,
                score=point.score if point.score is not None else 0.0,
                payload=dict(point.payload) if point.payload else {},
            )
            for point in results.points
        ]
