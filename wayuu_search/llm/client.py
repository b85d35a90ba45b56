"""LLM client interface and implementations."""

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from wayuu_search.config import GeminiSettings, LLMSettings, get_settings
from wayuu_search.exceptions import ErrorCode, LLMError
from wayuu_search.llm.models import GenerationResult
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_llm_request

logger = get_logger(__name__)

# Finish reasons that mean the candidate text must not be used.
BLOCKED_FINISH_REASONS = frozenset({"SAFETY", "RECITATION", "LANGUAGE"})


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Defines the interface for single-turn text generation.
    """

    @abstractmethod
    async def generate_text(self, prompt: str) -> GenerationResult:
        """Generate text from a prompt.

        Args:
            prompt: Complete prompt text.

        Returns:
            GenerationResult with generated text.

        Raises:
            LLMError: If generation fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        ...

    async def close(self) -> None:
        """Release any resources held by the client."""
        return None


class GeminiClient(LLMClient):
    """LLM client for the Gemini ``generateContent`` API.

    One request per prompt: no streaming and no conversation state.
    """

    def __init__(
        self,
        settings: LLMSettings | None = None,
        gemini: GeminiSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            settings: Generation configuration.
            gemini: API access settings.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().llm
        self._gemini = gemini or get_settings().gemini
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    def _generation_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if self._settings.temperature is not None:
            config["temperature"] = self._settings.temperature
        if self._settings.max_tokens is not None:
            config["maxOutputTokens"] = self._settings.max_tokens
        return config

    async def generate_text(self, prompt: str) -> GenerationResult:
        """Generate text using the generateContent API."""
        client = await self._get_client()
        url = f"{self._gemini.base_url}/models/{self._settings.model}:generateContent"

        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        generation_config = self._generation_config()
        if generation_config:
            payload["generationConfig"] = generation_config

        headers = {"x-goog-api-key": self._gemini.api_key.get_secret_value()}
        start = time.perf_counter()

        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            self._track_failure(start)
            logger.error(f"LLM request timed out: {e}")
            raise LLMError(
                "LLM request timed out",
                code=ErrorCode.LLM_TIMEOUT,
                details={"timeout": self._settings.timeout},
            ) from e

        except httpx.HTTPStatusError as e:
            self._track_failure(start)
            status = e.response.status_code
            logger.error(f"LLM request failed: {status}")

            if status == 429:
                raise LLMError(
                    "Rate limit exceeded",
                    code=ErrorCode.LLM_RATE_LIMIT,
                    details={"status_code": status},
                ) from e

            raise LLMError(
                f"LLM service returned {status}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"status_code": status},
            ) from e

        except httpx.RequestError as e:
            self._track_failure(start)
            logger.error(f"LLM connection error: {e}")
            raise LLMError(
                f"Failed to connect to LLM service: {e}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"model": self._settings.model},
            ) from e

        try:
            result = self._parse_response(response.json())
        except LLMError:
            self._track_failure(start)
            raise
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            self._track_failure(start)
            raise LLMError(
                f"Invalid response from LLM: {e}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e

        track_llm_request(
            model=result.model,
            duration=time.perf_counter() - start,
            prompt_tokens=result.prompt_tokens,
            completion_tokens=result.completion_tokens,
        )
        return result

    def _parse_response(self, data: dict[str, Any]) -> GenerationResult:
        """Extract text and usage from a generateContent response.

        Raises:
            LLMError: If the prompt or the candidate was blocked.
        """
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                raise LLMError(
                    f"Prompt was blocked: {block_reason}",
                    code=ErrorCode.LLM_CONTENT_BLOCKED,
                    details={"block_reason": block_reason},
                )

        content = ""
        finish_reason = None
        if candidates:
            candidate = candidates[0]
            finish_reason = candidate.get("finishReason")
            if finish_reason in BLOCKED_FINISH_REASONS:
                raise LLMError(
                    f"Response was blocked: {finish_reason}",
                    code=ErrorCode.LLM_CONTENT_BLOCKED,
                    details={"finish_reason": finish_reason},
                )
            parts = (candidate.get("content") or {}).get("parts") or []
            content = "".join(part.get("text", "") for part in parts)

        usage = data.get("usageMetadata") or {}
        return GenerationResult(
            content=content,
            model=data.get("modelVersion", self._settings.model),
            prompt_tokens=usage.get("promptTokenCount", 0),
            completion_tokens=usage.get("candidatesTokenCount", 0),
            total_tokens=usage.get("totalTokenCount", 0),
            finish_reason=finish_reason,
        )

    def _track_failure(self, start: float) -> None:
        track_llm_request(
            model=self._settings.model,
            duration=time.perf_counter() - start,
            prompt_tokens=0,
            completion_tokens=0,
            success=False,
        )
