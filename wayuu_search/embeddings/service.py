"""Embedding service interface and implementations."""

import time
from abc import ABC, abstractmethod

import httpx

from wayuu_search.config import EmbeddingSettings, GeminiSettings, get_settings
from wayuu_search.embeddings.hashing import hash_embedding
from wayuu_search.embeddings.models import EmbeddingResult, EmbeddingStrategy
from wayuu_search.exceptions import EmbeddingError, ErrorCode
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_embedding_request

logger = get_logger(__name__)


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...

    async def close(self) -> None:
        """Release any resources held by the service."""
        return None


class GeminiEmbeddingService(EmbeddingService):
    """Embedding service backed by the Gemini ``embedContent`` API."""

    # Known model dimensions
    MODEL_DIMENSIONS = {
        "text-embedding-004": 768,
        "embedding-001": 768,
        "gemini-embedding-001": 3072,
    }

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        gemini: GeminiSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini embedding service.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            gemini: API access settings. Uses defaults if not provided.
            client: HTTP client. Creates new one if not provided.
        """
        self._settings = settings or get_settings().embedding
        self._gemini = gemini or get_settings().gemini
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get native embedding dimensions (768 when unknown)."""
        return self.MODEL_DIMENSIONS.get(self._settings.model, 768)

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with the model-native vector.

        Raises:
            EmbeddingError: If the request fails or the response is malformed.
        """
        client = await self._get_client()
        model = self._settings.model
        url = f"{self._gemini.base_url}/models/{model}:embedContent"
        payload = {
            "model": f"models/{model}",
            "content": {"parts": [{"text": text}]},
        }
        headers = {"x-goog-api-key": self._gemini.api_key.get_secret_value()}

        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={"model": model, "status": e.response.status_code},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.response.status_code}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Embedding request error: {e}", extra={"model": model})
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"model": model},
            ) from e

        try:
            values = response.json()["embedding"]["values"]
            embedding = [float(v) for v in values]
            if not embedding:
                raise ValueError("empty embedding")
            return EmbeddingResult(
                text=text,
                embedding=embedding,
                model=model,
                dimensions=len(embedding),
                strategy=EmbeddingStrategy.REMOTE,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EmbeddingError(
                f"Invalid response from embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e


class HashEmbeddingService(EmbeddingService):
    """Local, deterministic embeddings derived from word hashes.

    Pure: no I/O and no randomness, so identical text always maps to the
    identical vector.
    """

    MODEL_NAME = "word-hash"

    def __init__(self, dimensions: int) -> None:
        """Initialize the hash embedding service.

        Args:
            dimensions: Length of the produced vectors.
        """
        self._dimensions = dimensions

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self.MODEL_NAME

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions."""
        return self._dimensions

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate a hash embedding.

        Raises:
            EmbeddingError: If the text produces an all-zero vector, which
                cannot be normalized.
        """
        try:
            embedding = hash_embedding(text, self._dimensions)
        except ZeroDivisionError as e:
            raise EmbeddingError(
                "Cannot embed text without hashable words",
                code=ErrorCode.EMBEDDING_ZERO_VECTOR,
                details={"text_length": len(text)},
            ) from e

        return EmbeddingResult(
            text=text,
            embedding=embedding,
            model=self.MODEL_NAME,
            dimensions=self._dimensions,
            strategy=EmbeddingStrategy.HASH,
        )


class ResilientEmbeddingService(EmbeddingService):
    """Remote embeddings with a local fallback.

    Vectors from the primary service are front-truncated to the collection
    dimensionality. Any primary failure, including a vector shorter than the
    collection expects, switches to the fallback for that call.
    """

    def __init__(
        self,
        fallback: EmbeddingService,
        primary: EmbeddingService | None = None,
    ) -> None:
        """Initialize the resilient embedding service.

        Args:
            fallback: Service used when the primary fails. Its dimensions
                define the target dimensionality.
            primary: Remote service. When omitted only the fallback is used.
        """
        self._fallback = fallback
        self._primary = primary

    @property
    def model_name(self) -> str:
        """Get the primary model name, or the fallback's when hash-only."""
        if self._primary is not None:
            return self._primary.model_name
        return self._fallback.model_name

    @property
    def dimensions(self) -> int:
        """Get the target dimensions."""
        return self._fallback.dimensions

    async def close(self) -> None:
        """Close both underlying services."""
        if self._primary is not None:
            await self._primary.close()
        await self._fallback.close()

    async def embed(self, text: str) -> EmbeddingResult:
        """Embed text, falling back to the local strategy on primary failure.

        Raises:
            EmbeddingError: Only when the fallback itself cannot embed the text.
        """
        if self._primary is not None:
            start = time.perf_counter()
            try:
                result = self._fit(await self._primary.embed(text))
            except Exception as e:
                track_embedding_request(
                    model=self._primary.model_name,
                    strategy=EmbeddingStrategy.REMOTE.value,
                    duration=time.perf_counter() - start,
                    success=False,
                )
                logger.warning(
                    f"Primary embedding failed, using fallback: {e}",
                    extra={"model": self._primary.model_name},
                )
            else:
                track_embedding_request(
                    model=self._primary.model_name,
                    strategy=EmbeddingStrategy.REMOTE.value,
                    duration=time.perf_counter() - start,
                )
                return result

        start = time.perf_counter()
        try:
            result = await self._fallback.embed(text)
        except EmbeddingError:
            track_embedding_request(
                model=self._fallback.model_name,
                strategy=EmbeddingStrategy.HASH.value,
                duration=time.perf_counter() - start,
                success=False,
            )
            raise

        track_embedding_request(
            model=self._fallback.model_name,
            strategy=EmbeddingStrategy.HASH.value,
            duration=time.perf_counter() - start,
        )
        return result

    def _fit(self, result: EmbeddingResult) -> EmbeddingResult:
        """Truncate a primary vector to the target dimensions."""
        target = self.dimensions
        if result.dimensions < target:
            raise EmbeddingError(
                f"Embedding has {result.dimensions} dimensions, "
                f"collection expects {target}",
                code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
                details={"dimensions": result.dimensions, "expected": target},
            )
        if result.dimensions == target:
            return result

        return result.model_copy(
            update={"embedding": result.embedding[:target], "dimensions": target}
        )
