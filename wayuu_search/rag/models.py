"""Search pipeline data models."""

from pydantic import BaseModel, ConfigDict, Field

from wayuu_search.retrieval.models import SearchResult


class SearchResponse(BaseModel):
    """Response bundle for one query.

    ``error`` is only set when the whole operation was aborted; results are
    then empty and no answer is present.

    Attributes:
        query: The original query.
        results: Normalized hits in backend rank order.
        ai_response: Generated answer (serialized as ``aiResponse``).
        error: Failure message when the search could not be performed.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(description="Original query")
    results: list[SearchResult] = Field(
        default_factory=list,
        description="Search results",
    )
    ai_response: str | None = Field(
        default=None,
        alias="aiResponse",
        description="Generated answer",
    )
    error: str | None = Field(default=None, description="Error message")
