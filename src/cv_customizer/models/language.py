"""Language detection model."""

from pydantic import BaseModel, Field


class LanguageDetection(BaseModel):
    """Primary language of the CV."""

    language: str = Field(
        default="English",
        description="The detected language name (e.g., English, Norwegian, German)",
    )
    language_code: str = Field(
        default="en",
        description="The ISO language code (e.g., en, no, de)",
    )
    confidence: float = Field(
        default=0.8,
        ge=0,
        le=1,
        description="Confidence level of detection",
    )

    def instruction(self) -> str:
        """Directive added to every system prompt so output matches the CV language."""
        return (
            f"IMPORTANT: Provide all analysis, feedback, and suggestions in {self.language} "
            "language to match the language of the CV."
        )


DEFAULT_LANGUAGE = LanguageDetection(language="English", language_code="en", confidence=0.5)
