"""Tests for vector store module."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from qdrant_client.http.exceptions import UnexpectedResponse

from wayuu_search.config import QdrantSettings
from wayuu_search.exceptions import ErrorCode, VectorStoreError
from wayuu_search.vectorstore.models import VectorHit
from wayuu_search.vectorstore.service import QdrantVectorStore


def _settings(**overrides: object) -> QdrantSettings:
    values: dict[str, object] = {
        "url": "http://localhost:6333",
        "api_key": "qdrant-key",
        "collection_name": "wayuucollection",
    }
    values.update(overrides)
    return QdrantSettings(_env_file=None, **values)


def _point(point_id: int | str, score: float | None, payload: dict | None) -> MagicMock:
    point = MagicMock()
    point.id = point_id
    point.score = score
    point.payload = payload
    return point


def _unexpected(status_code: int) -> UnexpectedResponse:
    return UnexpectedResponse(
        status_code=status_code,
        reason_phrase="error",
        content=b"",
        headers=httpx.Headers(),
    )


class TestVectorHit:
    """Tests for VectorHit model."""

    def test_create_hit(self) -> None:
        """Hit keeps id, score and payload."""
        hit = VectorHit(id=7, score=0.95, payload={"text": "jamaya"})
        assert hit.id == 7
        assert hit.score == 0.95
        assert hit.payload["text"] == "jamaya"

    def test_default_payload(self) -> None:
        """Payload defaults to an empty dict."""
        hit = VectorHit(id="abc", score=0.1)
        assert hit.payload == {}


class TestQdrantVectorStore:
    """Tests for QdrantVectorStore."""

    def _create_mock_client(self, points: list | None = None) -> AsyncMock:
        """Create a mock Qdrant client."""
        client = AsyncMock()
        client.collection_exists = AsyncMock(return_value=True)
        mock_response = MagicMock()
        mock_response.points = points or []
        client.query_points = AsyncMock(return_value=mock_response)
        client.close = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_search_returns_hits(self) -> None:
        """Search maps points to hits in backend order."""
        mock_client = self._create_mock_client(
            [
                _point(1, 0.9, {"text": "first"}),
                _point("uuid-2", 0.5, None),
            ]
        )
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        hits = await store.search("wayuucollection", vector=[0.1, 0.2], limit=5)

        assert [h.id for h in hits] == [1, "uuid-2"]
        assert hits[0].payload == {"text": "first"}
        assert hits[1].payload == {}

    @pytest.mark.asyncio
    async def test_search_requests_payload_without_vectors(self) -> None:
        """Search asks for payloads and omits stored vectors."""
        mock_client = self._create_mock_client()
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        await store.search("wayuucollection", vector=[0.1, 0.2], limit=5)

        kwargs = mock_client.query_points.call_args.kwargs
        assert kwargs["collection_name"] == "wayuucollection"
        assert kwargs["query"] == [0.1, 0.2]
        assert kwargs["limit"] == 5
        assert kwargs["with_payload"] is True
        assert kwargs["with_vectors"] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("requested", "sent"), [(1, 1), (10, 10), (11, 10), (50, 10)])
    async def test_search_limit_clamped(self, requested: int, sent: int) -> None:
        """Requested limits above the ceiling are reduced to it."""
        mock_client = self._create_mock_client()
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        await store.search("wayuucollection", vector=[0.1], limit=requested)

        assert mock_client.query_points.call_args.kwargs["limit"] == sent

    @pytest.mark.asyncio
    async def test_missing_score_defaults_to_zero(self) -> None:
        """Points without a score get 0.0."""
        mock_client = self._create_mock_client([_point(3, None, {})])
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        hits = await store.search("wayuucollection", vector=[0.1])
        assert hits[0].score == 0.0

    @pytest.mark.asyncio
    async def test_search_error(self) -> None:
        """Search errors are wrapped with the backend message."""
        mock_client = self._create_mock_client()
        mock_client.query_points.side_effect = RuntimeError("connection refused")
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.search("wayuucollection", vector=[0.1])

        assert exc_info.value.code == ErrorCode.VECTOR_STORE_ERROR
        assert exc_info.value.message == "connection refused"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "code"),
        [
            (401, ErrorCode.VECTOR_STORE_AUTH_ERROR),
            (403, ErrorCode.VECTOR_STORE_AUTH_ERROR),
            (404, ErrorCode.COLLECTION_NOT_FOUND),
            (500, ErrorCode.VECTOR_STORE_ERROR),
        ],
    )
    async def test_search_http_error_codes(
        self, status_code: int, code: ErrorCode
    ) -> None:
        """HTTP failures map to specific error codes."""
        mock_client = self._create_mock_client()
        mock_client.query_points.side_effect = _unexpected(status_code)
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.search("wayuucollection", vector=[0.1])

        assert exc_info.value.code == code
        assert exc_info.value.details["collection"] == "wayuucollection"

    @pytest.mark.asyncio
    async def test_collection_exists(self) -> None:
        """Existence check is delegated to the client."""
        mock_client = self._create_mock_client()
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        assert await store.collection_exists("wayuucollection") is True
        mock_client.collection_exists.assert_called_once_with("wayuucollection")

    @pytest.mark.asyncio
    async def test_collection_exists_error(self) -> None:
        """Existence check failures raise VectorStoreError."""
        mock_client = self._create_mock_client()
        mock_client.collection_exists.side_effect = _unexpected(403)
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.collection_exists("wayuucollection")

        assert exc_info.value.code == ErrorCode.VECTOR_STORE_AUTH_ERROR

    def test_max_limit_from_settings(self) -> None:
        """Ceiling comes from configuration."""
        store = QdrantVectorStore(settings=_settings(max_limit=3), client=AsyncMock())
        assert store.max_limit == 3

    @pytest.mark.asyncio
    async def test_close_owned_client(self) -> None:
        """Owned client is closed."""
        mock_client = self._create_mock_client()
        store = QdrantVectorStore(settings=_settings(), client=mock_client)
        store._owns_client = True

        await store.close()

        mock_client.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_borrowed_client(self) -> None:
        """Injected clients are left open."""
        mock_client = self._create_mock_client()
        store = QdrantVectorStore(settings=_settings(), client=mock_client)

        await store.close()

        mock_client.close.assert_not_called()
