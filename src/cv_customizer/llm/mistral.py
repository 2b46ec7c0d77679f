"""Mistral LLM provider."""

from langchain_core.language_models import BaseChatModel
from langchain_mistralai import ChatMistralAI

from cv_customizer.llm.base import LLMProvider


class MistralProvider(LLMProvider):
    """Mistral provider. The catalog marks its models as text-only."""

    provider_name = "mistral"

    def _create_chat_model(self) -> BaseChatModel:
        return ChatMistralAI(
            model=self.model,
            api_key=self.api_key,
            temperature=0.2,
            timeout=int(self.timeout),
            max_retries=self.max_retries,
        )

    def _create_extraction_model(self) -> BaseChatModel:
        return ChatMistralAI(
            model=self.model,
            api_key=self.api_key,
            temperature=0,
            timeout=int(self.timeout),
            max_retries=self.max_retries,
        )
