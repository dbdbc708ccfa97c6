"""
Test suite for MediatorGateway.

Uses a mocked chat model; no network calls are made.

System role: Verification of the text-generation seam
"""

from unittest.mock import AsyncMock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from mediator.configs.gemini import GeminiSettings
from mediator.core.exceptions import GatewayError
from mediator.core.gateway import HistoryTurn, MediatorGateway
from mediator.core.gateway.prompts import COMPLETION_CUE, MEDIATOR_SYSTEM_PROMPT


class Row:
    """Minimal stand-in for a stored message."""

    def __init__(self, content: str) -> None:
        self.content = content


@pytest.fixture
def mock_model() -> AsyncMock:
    """Provide mock chat model."""
    model = AsyncMock()
    model.ainvoke = AsyncMock(return_value=AIMessage(content="I hear you. What happened?"))
    return model


@pytest.fixture
def gateway(mock_model: AsyncMock) -> MediatorGateway:
    """Provide gateway wired to the mock model."""
    return MediatorGateway(settings=GeminiSettings(api_key="test-key"), model=mock_model)


class TestMediatorGatewayConfig:
    """Test suite for model construction."""

    def test_missing_api_key_should_raise_gateway_error(self) -> None:
        # Arrange
        gateway = MediatorGateway(settings=GeminiSettings(api_key=None))

        # Act & Assert
        with pytest.raises(GatewayError):
            _ = gateway.model

    def test_system_prompt_should_contain_completion_cue(self) -> None:
        assert COMPLETION_CUE in MEDIATOR_SYSTEM_PROMPT


class TestGenerateReply:
    """Test suite for MediatorGateway.generate_reply()."""

    @pytest.mark.asyncio
    async def test_should_send_system_history_and_new_message(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        # Arrange
        history = [
            HistoryTurn(role="model", content="Hi Alex. What's on your mind?"),
            {"role": "user", "content": "We keep arguing about chores."},
        ]

        # Act
        reply = await gateway.generate_reply(history, "He never does the dishes.")

        # Assert
        assert reply == "I hear you. What happened?"
        sent = mock_model.ainvoke.await_args.args[0]
        assert isinstance(sent[0], SystemMessage)
        assert isinstance(sent[1], AIMessage)
        assert isinstance(sent[2], HumanMessage)
        assert sent[2].content == "We keep arguing about chores."
        assert isinstance(sent[-1], HumanMessage)
        assert sent[-1].content == "He never does the dishes."

    @pytest.mark.asyncio
    async def test_model_failure_should_raise_gateway_error(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        mock_model.ainvoke.side_effect = RuntimeError("deadline exceeded")

        with pytest.raises(GatewayError) as exc_info:
            await gateway.generate_reply([], "Hello")

        assert exc_info.value.details["operation"] == "reply"

    @pytest.mark.asyncio
    async def test_empty_output_should_raise_gateway_error(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        mock_model.ainvoke.return_value = AIMessage(content="   ")

        with pytest.raises(GatewayError):
            await gateway.generate_reply([], "Hello")


class TestGenerateSummary:
    """Test suite for MediatorGateway.generate_summary()."""

    @pytest.mark.asyncio
    async def test_should_return_cleaned_summary(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        # Arrange
        mock_model.ainvoke.return_value = AIMessage(content='"Sharing household chores fairly"\n')

        # Act
        summary = await gateway.generate_summary([Row("He never helps"), Row("I'm tired")])

        # Assert
        assert summary == "Sharing household chores fairly"
        prompt = mock_model.ainvoke.await_args.args[0]
        assert "He never helps\nI'm tired" in prompt[-1].content

    @pytest.mark.asyncio
    async def test_quotes_only_should_raise_gateway_error(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        mock_model.ainvoke.return_value = AIMessage(content='""')

        with pytest.raises(GatewayError):
            await gateway.generate_summary([Row("x")])


class TestGenerateReport:
    """Test suite for MediatorGateway.generate_report()."""

    @pytest.mark.asyncio
    async def test_should_parse_structured_report(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        # Arrange
        mock_model.ainvoke.return_value = AIMessage(
            content='```json\n{"analysis": "A", "advice_for_a": "B", "advice_for_b": "C"}\n```'
        )

        # Act
        report = await gateway.generate_report([Row("a1"), Row("a2")], [Row("b1"), Row("b2")])

        # Assert
        assert report is not None
        assert (report.analysis, report.advice_for_a, report.advice_for_b) == ("A", "B", "C")
        prompt = mock_model.ainvoke.await_args.args[0][-1].content
        assert "PARTNER A:\na1\na2" in prompt
        assert "PARTNER B:\nb1\nb2" in prompt

    @pytest.mark.asyncio
    async def test_unparsable_output_should_return_none(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        mock_model.ainvoke.return_value = AIMessage(content="Sorry, I can't do that.")

        assert await gateway.generate_report([Row("a")], [Row("b")]) is None

    @pytest.mark.asyncio
    async def test_model_failure_should_return_none(
        self, gateway: MediatorGateway, mock_model: AsyncMock
    ) -> None:
        mock_model.ainvoke.side_effect = TimeoutError()

        assert await gateway.generate_report([Row("a")], [Row("b")]) is None
