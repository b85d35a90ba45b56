"""Prompt templates for grounded answers."""

from abc import ABC, abstractmethod
from typing import Any


class PromptTemplate(ABC):
    """Abstract base class for prompt templates."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the template with provided variables.

        Args:
            **kwargs: Template variables.

        Returns:
            Formatted prompt string.
        """
        ...


class GroundedPromptTemplate(PromptTemplate):
    """Single-message prompt that confines the answer to retrieved passages.

    The prompt carries, in order: the assistant persona, the grounding rule,
    the user's query, the search results and the style instructions.
    """

    DEFAULT_PERSONA = (
        "You are an assistant specialized in the Wayuu language (Wayuunaiki)."
    )

    DEFAULT_GROUNDING = """Answer the user's query based ONLY on the information provided in the search results.

If the information is not enough to answer completely, state which aspects
you cannot cover with the available information."""

    DEFAULT_INSTRUCTIONS = (
        "Answer clearly and in a structured way",
        "Include examples when relevant",
        "Keep an educational and respectful tone",
        "If there is contradictory information, clarify it",
        "Cite the sources when appropriate",
    )

    TEMPLATE = """{persona} {grounding}

User query: {question}

Relevant search results:
{context}

Instructions:
{instructions}"""

    def __init__(
        self,
        persona: str | None = None,
        grounding: str | None = None,
        instructions: tuple[str, ...] | None = None,
    ) -> None:
        """Initialize the grounded prompt template.

        Args:
            persona: Custom role description.
            grounding: Custom grounding rule.
            instructions: Custom style instructions.
        """
        self.persona = persona or self.DEFAULT_PERSONA
        self.grounding = grounding or self.DEFAULT_GROUNDING
        self.instructions = instructions or self.DEFAULT_INSTRUCTIONS

    def format(self, **kwargs: Any) -> str:
        """Format the template.

        Args:
            **kwargs: Must include 'question' and 'context'.

        Returns:
            Formatted prompt.
        """
        return self.TEMPLATE.format(
            persona=self.persona,
            grounding=self.grounding,
            instructions="\n".join(f"- {line}" for line in self.instructions),
            **kwargs,
        )

    def build_prompt(self, question: str, context: str) -> str:
        """Build the complete prompt.

        Args:
            question: User query, included verbatim.
            context: Assembled search results block (may be empty).

        Returns:
            Prompt text.
        """
        return self.format(question=question, context=context)
