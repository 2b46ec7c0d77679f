"""Base LLM provider abstraction."""

from abc import ABC, abstractmethod
from typing import Literal, TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from pydantic import BaseModel

from cv_customizer.prompts.base import StagePrompt

T = TypeVar("T", bound=BaseModel)

# Default timeout in seconds for API requests
DEFAULT_TIMEOUT = 120.0
# Stages never retry: one invocation is one outbound call
DEFAULT_MAX_RETRIES = 0


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider instance is bound to one provider+model pair. Models are cached
    on first access and reused for subsequent calls.
    """

    provider_name: str = ""
    structured_output_method: str = "function_calling"

    _chat_model: BaseChatModel | None = None
    _extraction_model: BaseChatModel | None = None

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        self._chat_model = None
        self._extraction_model = None

    def get_chat_model(self) -> BaseChatModel:
        """Get a cached chat model instance for creative rewriting."""
        if self._chat_model is None:
            self._chat_model = self._create_chat_model()
        return self._chat_model

    def get_extraction_model(self) -> BaseChatModel:
        """Get a cached model optimized for structured extraction and judgement."""
        if self._extraction_model is None:
            self._extraction_model = self._create_extraction_model()
        return self._extraction_model

    @abstractmethod
    def _create_chat_model(self) -> BaseChatModel:
        """Create a new chat model instance. Override in subclasses."""

    @abstractmethod
    def _create_extraction_model(self) -> BaseChatModel:
        """Create a new extraction model instance (temperature=0). Override in subclasses."""

    def generate_structured(
        self,
        prompt: StagePrompt,
        output_schema: type[T],
        creative: bool = False,
    ) -> T:
        """Run one generation call constrained to ``output_schema``.

        Args:
            prompt: System instruction and user message parts.
            output_schema: Pydantic model the output must satisfy.
            creative: Use the chat model instead of the temperature=0 model.

        Returns:
            Parsed instance of ``output_schema``.

        Raises:
            OutputParserException: If the model returned no structured output.
        """
        model = self.get_chat_model() if creative else self.get_extraction_model()
        structured_model = model.with_structured_output(
            output_schema, method=self.structured_output_method
        )
        result = structured_model.invoke(prompt.to_messages())
        if result is None:
            raise OutputParserException(f"Model returned no {output_schema.__name__} output")
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"


def get_llm_provider(
    provider: Literal["openai", "anthropic", "mistral", "google"],
    model: str | None = None,
    api_key: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> LLMProvider:
    """Factory function to get an LLM provider instance."""
    if provider == "openai":
        from cv_customizer.llm.openai import OpenAIProvider

        return OpenAIProvider(model=model or "gpt-4o", api_key=api_key, timeout=timeout)
    elif provider == "anthropic":
        from cv_customizer.llm.anthropic import AnthropicProvider

        return AnthropicProvider(
            model=model or "claude-sonnet-4-5-20250929", api_key=api_key, timeout=timeout
        )
    elif provider == "mistral":
        from cv_customizer.llm.mistral import MistralProvider

        return MistralProvider(
            model=model or "mistral-large-latest", api_key=api_key, timeout=timeout
        )
    elif provider == "google":
        from cv_customizer.llm.google import GoogleProvider

        return GoogleProvider(model=model or "gemini-2.5-pro", api_key=api_key, timeout=timeout)
    else:
        raise ValueError(f"Unknown provider: {provider}")
