"""Google Gemini LLM provider."""

import os

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from cv_customizer.llm.base import LLMProvider


class GoogleProvider(LLMProvider):
    """Gemini provider. Gemini reads PDF attachments natively.

    Without an explicit key the client falls back to ``GOOGLE_API_KEY``.
    """

    provider_name = "google"
    creative_temperature = 0.3

    def _gemini(self, temperature: float) -> ChatGoogleGenerativeAI:
        return ChatGoogleGenerativeAI(
            model=self.model,
            temperature=temperature,
            google_api_key=self.api_key or os.getenv("GOOGLE_API_KEY"),
            timeout=self.timeout,
            max_retries=self.max_retries,
        )

    def _create_chat_model(self) -> BaseChatModel:
        return self._gemini(self.creative_temperature)

    def _create_extraction_model(self) -> BaseChatModel:
        return self._gemini(0)
