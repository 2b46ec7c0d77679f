"""Anthropic Claude LLM provider."""

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel

from cv_customizer.llm.base import LLMProvider

# Large enough for the projects correction payload
DEFAULT_MAX_TOKENS = 8192


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with model caching."""

    provider_name = "anthropic"

    def _create_chat_model(self) -> BaseChatModel:
        """Create Anthropic chat model."""
        return ChatAnthropic(
            model=self.model,
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=self.max_retries,
            max_tokens=DEFAULT_MAX_TOKENS,
        )

    def _create_extraction_model(self) -> BaseChatModel:
        """Create model for structured extraction with temperature=0."""
        return ChatAnthropic(
            model=self.model,
            api_key=self.api_key,
            temperature=0,
            timeout=self.timeout,
            max_retries=self.max_retries,
            max_tokens=DEFAULT_MAX_TOKENS,
        )
