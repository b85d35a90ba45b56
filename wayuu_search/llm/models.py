"""LLM data models."""

from pydantic import BaseModel, Field


class GenerationResult(BaseModel):
    """Result from LLM generation.

    Attributes:
        content: The generated text (empty when the model produced none).
        model: Model used for generation.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
        total_tokens: Total tokens used.
        finish_reason: Why the model stopped, when reported.
    """

    content: str = Field(description="Generated text")
    model: str = Field(description="Model used")
    prompt_tokens: int = Field(default=0, description="Prompt token count")
    completion_tokens: int = Field(default=0, description="Completion token count")
    total_tokens: int = Field(default=0, description="Total token count")
    finish_reason: str | None = Field(default=None, description="Finish reason")
