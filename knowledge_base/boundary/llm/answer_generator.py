"""
Answer generator.

Sends the assembled context and the user question to a LangChain chat model
and returns the answer text.

Dependencies: langchain_core, langchain_google_genai, knowledge_base.core.prompts
System role: Generation boundary for the chat endpoint
"""

import asyncio
import logging

from langchain_core.language_models import BaseChatModel

from knowledge_base.configs.llm import API_KEY_HINT, API_KEY_SETTING, LLMSettings
from knowledge_base.core.exceptions import ConfigurationError, UpstreamServiceError
from knowledge_base.core.prompts.answer_prompt import ANSWER_PROMPT

logger = logging.getLogger(__name__)

NO_ANSWER_TEXT = "No answer generated"


def _message_text(content) -> str:
    """Flatten chat model content (string or list of parts) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class AnswerGenerator:
    """Grounded answer writer over a chat model."""

    def __init__(self, model: BaseChatModel, timeout_seconds: float | None = None) -> None:
        self._model = model
        self._chain = ANSWER_PROMPT | model
        self.timeout_seconds = timeout_seconds

    async def generate(self, context: str, question: str) -> str:
        """
        Write an answer to the question from the given context.

        Args:
            context: Assembled retrieval context
            question: User question

        Returns:
            Answer text, or a fixed placeholder when the model returns nothing

        Raises:
            UpstreamServiceError: Model call failed or timed out
        """
        logger.info(
            f"{__name__}:generate - START context_len={len(context)}, question_len={len(question)}"
        )
        try:
            message = await asyncio.wait_for(
                self._chain.ainvoke({"context": context, "question": question}),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamServiceError(
                "Answer generation timed out",
                service="generation",
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except Exception as e:
            logger.error(
                f"{__name__}:generate - Generation failed: {type(e).__name__}",
                extra={"error": str(e)},
            )
            raise UpstreamServiceError(
                "Failed to generate answer",
                service="generation",
                upstream_error=str(e),
            ) from e

        answer = _message_text(getattr(message, "content", "")).strip()
        logger.info(f"{__name__}:generate - END answer_len={len(answer)}")
        return answer or NO_ANSWER_TEXT


def build_answer_generator(settings: LLMSettings) -> AnswerGenerator:
    """
    Create the production answer generator from settings.

    Raises:
        ConfigurationError: The chat model rejected its configuration, usually a missing API key
    """
    from langchain_google_genai import ChatGoogleGenerativeAI

    kwargs = {}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key

    try:
        model = ChatGoogleGenerativeAI(
            model=settings.generation_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            **kwargs,
        )
    except Exception as e:
        logger.error(
            f"{__name__}:build_answer_generator - Chat model could not be configured",
            extra={"model": settings.generation_model, "error": str(e)},
        )
        raise ConfigurationError(
            "Chat model could not be configured",
            setting=API_KEY_SETTING,
            hint=API_KEY_HINT,
        ) from e
    return AnswerGenerator(model, timeout_seconds=settings.request_timeout_seconds)
