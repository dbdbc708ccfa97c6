"""
Mediator text-generation gateway.

Stateless wrapper around a Gemini chat model. Turns a role-tagged history
plus a new message into mediator text, a short topic summary, or a
structured joint report.

Dependencies: langchain_google_genai, langchain_core, mediator.configs
System role: Single seam between the mediation protocol and the AI model
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from mediator.configs.gemini import GeminiSettings
from mediator.core.exceptions import GatewayError
from mediator.core.gateway.parsing import clean_summary, content_to_text, parse_report
from mediator.core.gateway.prompts import (
    BRIDGE_SUMMARY_PROMPT,
    MEDIATOR_SYSTEM_PROMPT,
    REPORT_PROMPT,
    format_transcript,
)
from mediator.core.gateway.schema import HistoryTurn, MediationReport

logger = logging.getLogger(__name__)


class HasContent(Protocol):
    content: str


class MediatorGateway:
    """
    Gateway to the text-generation model.

    Each method is a single request/response. Reply and summary failures
    raise GatewayError; report failures (transport or unparsable output)
    return None.
    """

    def __init__(
        self,
        settings: GeminiSettings | None = None,
        model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize gateway.

        Args:
            settings: Gemini settings (defaults loaded from environment)
            model: Pre-built chat model, mainly for tests. Built lazily when None.
        """
        self._settings = settings or GeminiSettings()
        self._model = model

    @property
    def model(self) -> BaseChatModel:
        """Chat model, created on first use."""
        if self._model is None:
            if not self._settings.api_key:
                raise GatewayError("Gemini API key is not configured", operation="configure")
            self._model = ChatGoogleGenerativeAI(
                model=self._settings.model,
                google_api_key=self._settings.api_key,
                temperature=self._settings.temperature,
                timeout=self._settings.timeout,
                max_retries=self._settings.max_retries,
            )
        return self._model

    async def _complete(self, messages: list[BaseMessage], operation: str) -> str:
        try:
            response = await self.model.ainvoke(messages)
        except GatewayError:
            raise
        except Exception as e:
            logger.warning(
                "Gateway call failed",
                extra={"operation": operation, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise GatewayError(f"Text generation failed: {e}", operation=operation) from e

        text = content_to_text(response.content).strip()
        if not text:
            raise GatewayError("Model returned an empty response", operation=operation)
        return text

    async def generate_reply(
        self,
        history: Sequence[HistoryTurn | dict[str, Any]],
        new_message: str,
    ) -> str:
        """
        Generate the mediator's next reply in a private thread.

        Args:
            history: Prior turns as user/model alternation, oldest first
            new_message: The partner's new message

        Returns:
            str: Mediator reply text

        Raises:
            GatewayError: If the call fails or returns nothing
        """
        messages: list[BaseMessage] = [SystemMessage(content=MEDIATOR_SYSTEM_PROMPT)]
        for turn in history:
            turn = HistoryTurn.model_validate(turn)
            if turn.role == "user":
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))
        messages.append(HumanMessage(content=new_message))

        logger.debug("Generating reply", extra={"history_turns": len(history)})
        return await self._complete(messages, operation="reply")

    async def generate_summary(self, messages: Sequence[HasContent]) -> str:
        """
        Summarize the topic of Partner A's messages in 5-10 neutral words.

        Raises:
            GatewayError: If the call fails or the summary is empty
        """
        transcript = format_transcript([m.content for m in messages])
        prompt = BRIDGE_SUMMARY_PROMPT.invoke({"transcript": transcript}).to_messages()

        summary = clean_summary(await self._complete(prompt, operation="summary"))
        if not summary:
            raise GatewayError("Model returned an empty summary", operation="summary")
        return summary

    async def generate_report(
        self,
        messages_a: Sequence[HasContent],
        messages_b: Sequence[HasContent],
    ) -> MediationReport | None:
        """
        Produce the joint mediation report from both partners' messages.

        Returns:
            MediationReport, or None if generation failed or output was unparsable
        """
        prompt = REPORT_PROMPT.invoke({
            "transcript_a": format_transcript([m.content for m in messages_a]),
            "transcript_b": format_transcript([m.content for m in messages_b]),
        }).to_messages()

        try:
            raw = await self._complete(prompt, operation="report")
        except GatewayError as e:
            logger.warning("Report generation failed", extra={"error_msg": e.message})
            return None

        return parse_report(raw)
