"""Tests for LLM provider abstraction."""

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel

from cv_customizer.llm.base import DEFAULT_MAX_RETRIES, LLMProvider, get_llm_provider
from cv_customizer.prompts.base import StagePrompt


class Answer(BaseModel):
    name: str
    value: int


class MockProvider(LLMProvider):
    """Concrete provider whose models are MagicMocks."""

    provider_name = "mock"

    def __init__(self) -> None:
        super().__init__(model="mock-model", api_key="test-key")
        self.chat_mock = MagicMock(name="chat")
        self.extraction_mock = MagicMock(name="extraction")

    def _create_chat_model(self):
        return self.chat_mock

    def _create_extraction_model(self):
        return self.extraction_mock


class TestGetLLMProvider:
    """Tests for the get_llm_provider factory function."""

    @patch("cv_customizer.llm.openai.OpenAIProvider")
    def test_openai_provider(self, mock_provider: MagicMock) -> None:
        """Test that openai provider is correctly instantiated."""
        mock_instance = MagicMock()
        mock_provider.return_value = mock_instance

        result = get_llm_provider("openai", model="o4-mini", api_key="test-key", timeout=30)

        mock_provider.assert_called_once_with(model="o4-mini", api_key="test-key", timeout=30)
        assert result is mock_instance

    @patch("cv_customizer.llm.anthropic.AnthropicProvider")
    def test_anthropic_default_model(self, mock_provider: MagicMock) -> None:
        get_llm_provider("anthropic")
        mock_provider.assert_called_once_with(
            model="claude-sonnet-4-5-20250929", api_key=None, timeout=120.0
        )

    @patch("cv_customizer.llm.mistral.MistralProvider")
    def test_mistral_default_model(self, mock_provider: MagicMock) -> None:
        get_llm_provider("mistral", api_key="mistral-key")
        mock_provider.assert_called_once_with(
            model="mistral-large-latest", api_key="mistral-key", timeout=120.0
        )

    @patch("cv_customizer.llm.google.GoogleProvider")
    def test_google_default_model(self, mock_provider: MagicMock) -> None:
        get_llm_provider("google")
        mock_provider.assert_called_once_with(model="gemini-2.5-pro", api_key=None, timeout=120.0)

    @patch("cv_customizer.llm.openai.OpenAIProvider")
    def test_openai_default_model(self, mock_provider: MagicMock) -> None:
        get_llm_provider("openai")
        mock_provider.assert_called_once_with(model="gpt-4o", api_key=None, timeout=120.0)

    def test_unknown_provider_raises(self) -> None:
        """Test that unknown provider raises ValueError."""
        with pytest.raises(ValueError, match="Unknown provider: invalid"):
            get_llm_provider("invalid")  # type: ignore[arg-type]


class TestLLMProviderInterface:
    """Tests for the LLMProvider abstract base class."""

    def test_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            LLMProvider(model="x")  # type: ignore[abstract]

    def test_models_are_cached(self) -> None:
        provider = MockProvider()
        assert provider.get_chat_model() is provider.get_chat_model()
        assert provider.get_extraction_model() is provider.extraction_mock

    def test_no_retries_by_default(self) -> None:
        assert DEFAULT_MAX_RETRIES == 0
        assert MockProvider().max_retries == 0

    def test_repr(self) -> None:
        assert repr(MockProvider()) == "MockProvider(model='mock-model')"


class TestGenerateStructured:
    """Tests for the generate_structured method."""

    def test_uses_extraction_model_with_function_calling(self) -> None:
        provider = MockProvider()
        structured = MagicMock()
        structured.invoke.return_value = Answer(name="test", value=42)
        provider.extraction_mock.with_structured_output.return_value = structured

        result = provider.generate_structured(StagePrompt("system", "question"), Answer)

        provider.extraction_mock.with_structured_output.assert_called_once_with(
            Answer, method="function_calling"
        )
        provider.chat_mock.with_structured_output.assert_not_called()
        assert result == Answer(name="test", value=42)

    def test_creative_uses_chat_model(self) -> None:
        provider = MockProvider()
        provider.chat_mock.with_structured_output.return_value.invoke.return_value = Answer(
            name="x", value=1
        )

        provider.generate_structured(StagePrompt("system", "question"), Answer, creative=True)

        provider.chat_mock.with_structured_output.assert_called_once()
        provider.extraction_mock.with_structured_output.assert_not_called()

    def test_sends_system_and_human_messages(self, cv_document) -> None:
        provider = MockProvider()
        structured = provider.extraction_mock.with_structured_output.return_value
        structured.invoke.return_value = Answer(name="x", value=1)

        provider.generate_structured(StagePrompt("system", "question", (cv_document,)), Answer)

        messages = structured.invoke.call_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == "system"
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content[0] == {"type": "text", "text": "question"}
        assert messages[1].content[1]["type"] == "file"

    def test_missing_output_raises_parser_error(self) -> None:
        provider = MockProvider()
        provider.extraction_mock.with_structured_output.return_value.invoke.return_value = None

        with pytest.raises(OutputParserException, match="no Answer output"):
            provider.generate_structured(StagePrompt("system", "question"), Answer)

    def test_provider_errors_propagate(self) -> None:
        provider = MockProvider()
        structured = provider.extraction_mock.with_structured_output.return_value
        structured.invoke.side_effect = ConnectionError("network down")

        with pytest.raises(ConnectionError):
            provider.generate_structured(StagePrompt("system", "question"), Answer)


class TestConcreteProviders:
    """Tests for the client construction of each provider."""

    @patch("cv_customizer.llm.openai.ChatOpenAI")
    def test_openai_extraction_temperature_zero(self, mock_chat: MagicMock) -> None:
        from cv_customizer.llm.openai import OpenAIProvider

        OpenAIProvider(model="gpt-4o", api_key="k", timeout=60).get_extraction_model()

        mock_chat.assert_called_once_with(
            model="gpt-4o", temperature=0, api_key="k", timeout=60, max_retries=0
        )

    @patch("cv_customizer.llm.openai.ChatOpenAI")
    def test_openai_reasoning_model_has_no_temperature(self, mock_chat: MagicMock) -> None:
        from cv_customizer.llm.openai import OpenAIProvider

        OpenAIProvider(model="o4-mini", api_key="k").get_extraction_model()

        assert "temperature" not in mock_chat.call_args.kwargs

    @patch("cv_customizer.llm.anthropic.ChatAnthropic")
    def test_anthropic_no_retries(self, mock_chat: MagicMock) -> None:
        from cv_customizer.llm.anthropic import AnthropicProvider

        AnthropicProvider(model="claude-sonnet-4-5-20250929", api_key="k").get_chat_model()

        assert mock_chat.call_args.kwargs["max_retries"] == 0

    @patch("cv_customizer.llm.google.ChatGoogleGenerativeAI")
    def test_google_reads_env_key(
        self, mock_chat: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from cv_customizer.llm.google import GoogleProvider

        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
        GoogleProvider(model="gemini-2.5-pro").get_extraction_model()

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["google_api_key"] == "env-key"
        assert kwargs["temperature"] == 0

    @patch("cv_customizer.llm.mistral.ChatMistralAI")
    def test_mistral_client(self, mock_chat: MagicMock) -> None:
        from cv_customizer.llm.mistral import MistralProvider

        provider = MistralProvider(model="mistral-small-latest", api_key="k")
        provider.get_extraction_model()

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["model"] == "mistral-small-latest"
        assert kwargs["temperature"] == 0
        assert kwargs["max_retries"] == 0
        assert provider.provider_name == "mistral"
