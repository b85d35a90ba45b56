"""LLM client module."""

from wayuu_search.llm.client import GeminiClient, LLMClient
from wayuu_search.llm.models import GenerationResult
from wayuu_search.llm.prompts import GroundedPromptTemplate, PromptTemplate

__all__ = [
    "GeminiClient",
    "GenerationResult",
    "GroundedPromptTemplate",
    "LLMClient",
    "PromptTemplate",
]
