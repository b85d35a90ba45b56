"""Map raw vector hits onto the stable result shape.

Payloads come from an external ingestion process and any key may be missing
or carry an unexpected type; normalization never fails.
"""

from typing import Any

from wayuu_search.retrieval.models import HitPayload, SearchResult
from wayuu_search.vectorstore.models import VectorHit


def _as_text(value: Any) -> str:
    return str(value) if value else ""


def _as_count(value: Any) -> int:
    if not value or isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def normalize_payload(payload: dict[str, Any]) -> HitPayload:
    """Build a typed payload, substituting defaults for absent fields.

    The source label prefers ``file_name`` over ``source``.
    """
    timestamp = payload.get("upload_timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float, str)):
        timestamp = None

    return HitPayload(
        text=_as_text(payload.get("text")),
        source=_as_text(payload.get("file_name")) or _as_text(payload.get("source")),
        chunk_index=_as_count(payload.get("chunk_index")),
        total_chunks=_as_count(payload.get("total_chunks")),
        upload_timestamp=timestamp,
    )


def normalize_hit(hit: VectorHit) -> SearchResult:
    """Convert a raw hit into a SearchResult."""
    return SearchResult(
        id=str(hit.id),
        score=hit.score,
        payload=normalize_payload(hit.payload),
    )
