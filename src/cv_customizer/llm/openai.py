"""OpenAI LLM provider."""

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from cv_customizer.llm.base import LLMProvider


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider. PDF attachments go through chat completions file parts."""

    provider_name = "openai"

    def _create_chat_model(self) -> BaseChatModel:
        """Create OpenAI chat model with the API default temperature."""
        return ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )

    def _create_extraction_model(self) -> BaseChatModel:
        """Create model for structured extraction with temperature=0."""
        # Reasoning models (o-series) reject a temperature parameter
        if self.model.startswith("o"):
            return self._create_chat_model()
        return ChatOpenAI(
            model=self.model,
            temperature=0,
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
