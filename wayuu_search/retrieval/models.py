"""Retrieval data models."""

from pydantic import BaseModel, Field


class HitPayload(BaseModel):
    """Passage metadata with defaults for every field.

    Attributes:
        text: The retrieved passage.
        source: Provenance label (document file name).
        chunk_index: 0-based position of the passage within its source.
        total_chunks: Number of fragments produced from the source.
        upload_timestamp: When the source was indexed, if recorded.
    """

    text: str = Field(default="", description="Passage text")
    source: str = Field(default="", description="Source document")
    chunk_index: int = Field(default=0, description="0-based chunk position")
    total_chunks: int = Field(default=0, description="Chunks in the source")
    upload_timestamp: int | float | str | None = Field(
        default=None,
        description="Upload timestamp",
    )


class SearchResult(BaseModel):
    """A normalized search hit.

    Attributes:
        id: Point identifier, always a string.
        score: Similarity score (higher is more similar).
        payload: Typed passage metadata.
    """

    id: str = Field(description="Point identifier")
    score: float = Field(description="Similarity score")
    payload: HitPayload = Field(
        default_factory=HitPayload,
        description="Passage metadata",
    )
