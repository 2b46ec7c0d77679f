"""Fact check of customized content against the original CV."""

import logging

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import ContentValidationFailed
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.validation import ContentValidation
from cv_customizer.prompts.validation import build_content_validation_prompt

logger = logging.getLogger(__name__)


class ContentValidator(StageAgent):
    """Flag fabricated or unsupported claims in the customized CV."""

    failure = ContentValidationFailed

    def validate(
        self,
        cv: SourceDocument,
        profile: ProfileCustomization,
        competencies: KeyCompetencies,
        projects: list[ProjectCustomization],
        language: LanguageDetection | None = None,
    ) -> ContentValidation:
        prompt = build_content_validation_prompt(cv, profile, competencies, projects, language)
        validation = self._generate(prompt, ContentValidation)
        overall = validation.overall_validation
        logger.info(
            "Content validation %s (confidence: %s/10)",
            "passed" if overall.passes_validation else "failed",
            overall.confidence_score,
        )
        return validation
