"""Profile, competencies and projects customization."""

import logging

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import (
    CompetenciesCustomizationFailed,
    ProfileCustomizationFailed,
    ProjectsCustomizationFailed,
)
from cv_customizer.models.customization import (
    KeyCompetencies,
    ProfileCustomization,
    ProjectCustomization,
    ProjectsCustomizationResponse,
)
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.requirements import CustomerRequirements
from cv_customizer.prompts.customization import (
    build_competencies_customization_prompt,
    build_profile_customization_prompt,
    build_projects_customization_prompt,
)

logger = logging.getLogger(__name__)


class ProfileCustomizer(StageAgent):
    """Rewrite the profile summary to emphasize what the customer asks for."""

    failure = ProfileCustomizationFailed
    creative = True

    def customize(
        self,
        cv: SourceDocument,
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> ProfileCustomization:
        prompt = build_profile_customization_prompt(cv, requirements, language)
        profile = self._generate(prompt, ProfileCustomization)
        logger.info("Profile customization completed")
        return profile


class CompetenciesCustomizer(StageAgent):
    """Select and prioritize competencies relevant to the requirements."""

    failure = CompetenciesCustomizationFailed
    creative = True

    def customize(
        self,
        cv: SourceDocument,
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> KeyCompetencies:
        prompt = build_competencies_customization_prompt(cv, requirements, language)
        competencies = self._generate(prompt, KeyCompetencies)
        logger.info(
            "Competencies customization completed: %d relevant, %d suggested",
            len(competencies.relevant_competencies),
            len(competencies.additional_suggested_competencies),
        )
        return competencies


class ProjectsCustomizer(StageAgent):
    """Rewrite project descriptions following PARC."""

    failure = ProjectsCustomizationFailed
    creative = True

    def customize(
        self,
        cv: SourceDocument,
        requirements: CustomerRequirements,
        language: LanguageDetection | None = None,
    ) -> list[ProjectCustomization]:
        """Customize projects and return them most relevant first.

        Args:
            cv: The CV document.
            requirements: Analyzed customer requirements.
            language: Detected CV language, if any.

        Returns:
            Customized projects sorted by relevance_score, descending.
        """
        prompt = build_projects_customization_prompt(cv, requirements, language)
        response = self._generate(prompt, ProjectsCustomizationResponse)
        projects = sorted(response.projects, key=lambda p: p.relevance_score, reverse=True)
        logger.info("Project customization completed: %d projects", len(projects))
        return projects
