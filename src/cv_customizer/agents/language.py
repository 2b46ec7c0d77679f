"""CV language detection."""

import logging

from cv_customizer.llm.base import LLMProvider
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import DEFAULT_LANGUAGE, LanguageDetection
from cv_customizer.prompts.analysis import build_language_detection_prompt

logger = logging.getLogger(__name__)


class LanguageDetector:
    """Detect the primary language of a CV. Never fails."""

    def __init__(self, llm_provider: LLMProvider):
        self.llm_provider = llm_provider

    def detect(self, cv: SourceDocument) -> LanguageDetection:
        """Detect the CV language, falling back to English on any error.

        Args:
            cv: The CV document.

        Returns:
            LanguageDetection: Detected language, or English/en/0.5.
        """
        prompt = build_language_detection_prompt(cv)
        try:
            result = self.llm_provider.generate_structured(prompt, LanguageDetection)
        except Exception as e:
            logger.warning("Language detection failed, defaulting to English: %s", e)
            return DEFAULT_LANGUAGE

        detected = LanguageDetection(
            language=result.language or "English",
            language_code=result.language_code or "en",
            confidence=result.confidence,
        )
        logger.info(
            "Language detected: %s (%s) with %.0f%% confidence",
            detected.language,
            detected.language_code,
            detected.confidence * 100,
        )
        return detected
