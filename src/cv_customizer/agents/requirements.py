"""Customer requirements analysis."""

import logging
from collections.abc import Sequence

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import RequirementsAnalysisFailed
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.prompts.analysis import build_requirements_analysis_prompt

logger = logging.getLogger(__name__)


class RequirementsAnalyzer(StageAgent):
    """Extract must-have and should-have requirements from customer documents."""

    failure = RequirementsAnalysisFailed

    def analyze(
        self,
        requirement_docs: Sequence[SourceDocument],
        language: LanguageDetection | None = None,
    ) -> CustomerRequirements:
        prompt = build_requirements_analysis_prompt(requirement_docs, language)
        requirements = self._generate(prompt, CustomerRequirements)
        logger.info(
            "Requirements analysis completed: %d must-have, %d should-have",
            len(requirements.must_have_requirements),
            len(requirements.should_have_requirements),
        )
        return requirements
