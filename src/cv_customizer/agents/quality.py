"""Agents rating the quality of a consultant CV, one criterion each."""

import logging

from cv_customizer.agents.base import StageAgent
from cv_customizer.agents.errors import (
    CompetenceVerificationFailed,
    ContentCompletenessFailed,
    LanguageQualityFailed,
    ProjectDescriptionsFailed,
    SummaryQualityFailed,
)
from cv_customizer.llm.base import LLMProvider
from cv_customizer.models.document import SourceDocument
from cv_customizer.models.language import LanguageDetection
from cv_customizer.models.quality import (
    CRITERION_NAMES,
    STRENGTH_THRESHOLD,
    AnalysisSummary,
    CompetenceVerification,
    ContentCompleteness,
    Criterion,
    CriterionRating,
    ProjectDescriptions,
    SummaryQuality,
)
from cv_customizer.prompts.quality import build_analysis_summary_prompt, build_criterion_prompt

logger = logging.getLogger(__name__)

NO_STRENGTHS = "No specific strengths identified"
NO_IMPROVEMENT_AREAS = "No specific improvement areas identified"


class CriterionAgent(StageAgent):
    """Rate the CV on one criterion with a single call."""

    criterion: Criterion
    output_schema: type[CriterionRating] = CriterionRating

    def rate(
        self,
        cv: SourceDocument,
        language: LanguageDetection | None = None,
        checklist: str = "",
    ) -> CriterionRating:
        prompt = build_criterion_prompt(self.criterion, cv, language, checklist)
        rating = self._generate(prompt, self.output_schema)
        logger.info("%s rated %.1f/10", CRITERION_NAMES[self.criterion], rating.score)
        return rating


class LanguageQualityAgent(CriterionAgent):
    criterion = Criterion.LANGUAGE_QUALITY
    failure = LanguageQualityFailed


class ContentCompletenessAgent(CriterionAgent):
    criterion = Criterion.CONTENT_COMPLETENESS
    failure = ContentCompletenessFailed
    output_schema = ContentCompleteness


class SummaryQualityAgent(CriterionAgent):
    criterion = Criterion.SUMMARY_QUALITY
    failure = SummaryQualityFailed
    output_schema = SummaryQuality


class ProjectDescriptionsAgent(CriterionAgent):
    criterion = Criterion.PROJECT_DESCRIPTIONS
    failure = ProjectDescriptionsFailed
    output_schema = ProjectDescriptions

    def rate(
        self,
        cv: SourceDocument,
        language: LanguageDetection | None = None,
        checklist: str = "",
    ) -> ProjectDescriptions:
        rating = super().rate(cv, language, checklist)
        fixed = rating.with_score_from_projects()
        if fixed.score != rating.score:
            logger.info(
                "Project descriptions score set to %.1f from %d project ratings",
                fixed.score,
                len(fixed.project_evaluations),
            )
        return fixed


class CompetenceVerificationAgent(CriterionAgent):
    criterion = Criterion.COMPETENCE_VERIFICATION
    failure = CompetenceVerificationFailed
    output_schema = CompetenceVerification


CRITERION_AGENTS: dict[Criterion, type[CriterionAgent]] = {
    agent.criterion: agent
    for agent in (
        LanguageQualityAgent,
        ContentCompletenessAgent,
        SummaryQualityAgent,
        ProjectDescriptionsAgent,
        CompetenceVerificationAgent,
    )
}


def overall_score(ratings: list[tuple[Criterion, CriterionRating]]) -> float:
    """Mean criterion score, rounded to one decimal."""
    if not ratings:
        return 0.0
    return round(sum(rating.score for _, rating in ratings) / len(ratings), 1)


def key_strengths(ratings: list[tuple[Criterion, CriterionRating]]) -> list[str]:
    strengths = [
        f"Strong {CRITERION_NAMES[criterion].lower()} (scored {rating.score:.1f}/10)"
        for criterion, rating in ratings
        if rating.score >= STRENGTH_THRESHOLD
    ]
    return strengths or [NO_STRENGTHS]


def key_improvement_areas(ratings: list[tuple[Criterion, CriterionRating]]) -> list[str]:
    """Criteria below the strength threshold, weakest first."""
    weak = sorted(
        (pair for pair in ratings if pair[1].score < STRENGTH_THRESHOLD),
        key=lambda pair: pair[1].score,
    )
    areas = [
        f"Improve {CRITERION_NAMES[criterion].lower()} (scored {rating.score:.1f}/10)"
        for criterion, rating in weak
    ]
    return areas or [NO_IMPROVEMENT_AREAS]


class AnalysisSummarizer:
    """Write the overall summary of an analysis. Never fails."""

    def __init__(self, llm_provider: LLMProvider):
        self.llm_provider = llm_provider

    def summarize(
        self,
        ratings: list[tuple[Criterion, CriterionRating]],
        score: float,
        language: LanguageDetection | None = None,
    ) -> str:
        """Summarize the ratings, falling back to a fixed sentence on any error."""
        prompt = build_analysis_summary_prompt(ratings, score, language)
        try:
            result = self.llm_provider.generate_structured(prompt, AnalysisSummary, creative=True)
        except Exception as e:
            logger.warning("Analysis summary failed, using fallback: %s", e)
            return fallback_summary(score)
        return result.summary or fallback_summary(score)


def fallback_summary(score: float) -> str:
    return (
        f"CV evaluated with overall score {score:.1f}/10. "
        "Review detailed feedback for specific improvement areas."
    )
