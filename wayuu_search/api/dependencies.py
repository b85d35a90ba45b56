"""Process-wide service wiring and FastAPI dependencies."""

from dataclasses import dataclass

from fastapi import Request

from wayuu_search.config import Settings
from wayuu_search.embeddings.service import (
    EmbeddingService,
    GeminiEmbeddingService,
    HashEmbeddingService,
    ResilientEmbeddingService,
)
from wayuu_search.exceptions import ErrorCode, WayuuSearchError
from wayuu_search.llm.client import GeminiClient, LLMClient
from wayuu_search.rag.answer import AnswerGenerator
from wayuu_search.rag.pipeline import SearchPipeline
from wayuu_search.retrieval.retriever import SemanticRetriever
from wayuu_search.vectorstore.service import QdrantVectorStore, VectorStore


@dataclass
class AppServices:
    """Client handles built once at startup and shared read-only."""

    embedding_service: EmbeddingService
    vector_store: VectorStore
    llm_client: LLMClient
    pipeline: SearchPipeline
    collection: str

    async def close(self) -> None:
        """Close every owned client."""
        await self.embedding_service.close()
        await self.vector_store.close()
        await self.llm_client.close()


def build_services(settings: Settings) -> AppServices:
    """Build the search pipeline and its clients from validated settings."""
    primary = None
    if settings.embedding.remote_enabled:
        primary = GeminiEmbeddingService(settings.embedding, settings.gemini)
    embedding_service = ResilientEmbeddingService(
        fallback=HashEmbeddingService(settings.qdrant.vector_size),
        primary=primary,
    )

    vector_store = QdrantVectorStore(settings.qdrant)
    llm_client = GeminiClient(settings.llm, settings.gemini)

    retriever = SemanticRetriever(
        embedding_service=embedding_service,
        vector_store=vector_store,
        collection=settings.qdrant.collection_name,
    )
    pipeline = SearchPipeline(
        retriever=retriever,
        answer_generator=AnswerGenerator(llm_client),
        context_results=settings.search.context_results,
        max_passage_chars=settings.search.max_passage_chars,
    )

    return AppServices(
        embedding_service=embedding_service,
        vector_store=vector_store,
        llm_client=llm_client,
        pipeline=pipeline,
        collection=settings.qdrant.collection_name,
    )


def get_services(request: Request) -> AppServices:
    """Return the services attached to the application at startup.

    Raises:
        WayuuSearchError: If the application has not been started.
    """
    services: AppServices | None = getattr(request.app.state, "services", None)
    if services is None:
        raise WayuuSearchError(
            "Search pipeline not configured",
            code=ErrorCode.SERVICE_UNAVAILABLE,
        )
    return services


def get_search_pipeline(request: Request) -> SearchPipeline:
    """FastAPI dependency returning the shared search pipeline."""
    return get_services(request).pipeline
