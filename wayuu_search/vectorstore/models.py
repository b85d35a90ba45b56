"""Vector store data models."""

from typing import Any

from pydantic import BaseModel, Field


class VectorHit(BaseModel):
    """Raw neighbor returned by a vector similarity search.

    Attributes:
        id: Point identifier as stored by the backend (integer or UUID string).
        score: Similarity score (higher is more similar).
        payload: Stored metadata, unvalidated.
    """

    id: int | str = Field(description="Point identifier")
    score: float = Field(description="Similarity score")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Point payload",
    )
