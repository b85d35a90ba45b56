"""API routes for search operations."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from wayuu_search.api.dependencies import get_search_pipeline
from wayuu_search.logging_config import get_logger
from wayuu_search.rag.models import SearchResponse
from wayuu_search.rag.pipeline import SearchPipeline

logger = get_logger(__name__)


router = APIRouter(tags=["Search"])


class SearchRequest(BaseModel):
    """Request body for semantic search."""

    query: str = Field(min_length=1, description="Natural-language query")
    limit: int = Field(default=5, ge=1, le=10, description="Number of results")


@router.post(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
)
async def search_endpoint(
    request: SearchRequest,
    pipeline: Annotated[SearchPipeline, Depends(get_search_pipeline)],
) -> SearchResponse:
    """Search the Wayuu corpus and answer the query from the results."""
    logger.info(
        "Processing semantic search request",
        extra={"query_length": len(request.query), "limit": request.limit},
    )
    return await pipeline.perform_search(request.query, request.limit)
