"""Grounded answer generation with fixed fallbacks."""

from wayuu_search.llm.client import LLMClient
from wayuu_search.llm.prompts import GroundedPromptTemplate
from wayuu_search.logging_config import get_logger
from wayuu_search.observability.metrics import track_answer_fallback

logger = get_logger(__name__)

# The model answered but produced no text.
NO_RESPONSE_MESSAGE = "A response could not be generated."

# The model call itself failed.
FALLBACK_MESSAGE = (
    "Sorry, I could not generate an intelligent answer right now. "
    "You can still review the search results below."
)


class AnswerGenerator:
    """Asks the LLM for an answer confined to the supplied context."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: GroundedPromptTemplate | None = None,
    ) -> None:
        """Initialize the answer generator.

        Args:
            llm_client: LLM client for generation.
            prompt_template: Prompt template for grounded answers.
        """
        self._llm_client = llm_client
        self._prompt_template = prompt_template or GroundedPromptTemplate()

    async def generate_answer(self, query: str, context: str) -> str:
        """Generate an answer; never raises.

        Returns:
            The model text verbatim, NO_RESPONSE_MESSAGE if it was empty, or
            FALLBACK_MESSAGE if the call failed.
        """
        prompt = self._prompt_template.build_prompt(question=query, context=context)

        try:
            result = await self._llm_client.generate_text(prompt)
        except Exception as e:
            logger.error(f"Error generating AI response: {e}", exc_info=True)
            track_answer_fallback("error")
            return FALLBACK_MESSAGE

        if not result.content:
            logger.warning(
                "LLM returned no text",
                extra={"model": result.model, "finish_reason": result.finish_reason},
            )
            track_answer_fallback("empty")
            return NO_RESPONSE_MESSAGE

        logger.debug(
            "Answer generated",
            extra={"model": result.model, "tokens_used": result.total_tokens},
        )
        return result.content
