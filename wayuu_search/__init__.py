"""Wayuu semantic search service.

Retrieval-augmented question answering over a Qdrant collection of
Wayuu-language documents.
"""

__version__ = "1.0.0"
